"""Initial database schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the user and task tables"""

    # Create user table
    op.create_table(
        "user",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("username", sa.String(128), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("api_key", sa.String(32), nullable=False),
    )
    op.create_index("ix_user_username", "user", ["username"], unique=True)
    op.create_index("ix_user_api_key", "user", ["api_key"], unique=True)

    # Create task table
    op.create_table(
        "task",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("priority", sa.Integer, nullable=True),
        sa.Column(
            "is_completed",
            sa.Boolean,
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("user.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_task_name", "task", ["name"])
    op.create_index("ix_task_user_id", "task", ["user_id"])


def downgrade() -> None:
    """Drop all tables"""
    op.drop_index("ix_task_user_id", table_name="task")
    op.drop_index("ix_task_name", table_name="task")
    op.drop_table("task")

    op.drop_index("ix_user_api_key", table_name="user")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_table("user")
