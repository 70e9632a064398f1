"""
Task Model

To-do items owned by exactly one user.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, false
from sqlalchemy.orm import relationship

from .base import Base, SerializableMixin


class Task(SerializableMixin, Base):
    """Task model - a user's to-do item"""

    __tablename__ = "task"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique task identifier",
    )

    # Listing orders by name, hence the index
    name = Column(String(128), nullable=False, index=True, comment="Task name")

    priority = Column(Integer, nullable=True, comment="Optional priority")

    is_completed = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the task is done",
    )

    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
        comment="Task owner",
    )

    user = relationship("User", back_populates="tasks")

    def to_dict(self):
        """Convert model to dictionary with is_completed as a real boolean."""
        data = super().to_dict()
        data["is_completed"] = bool(data["is_completed"])
        return data
