"""
User Model

Account records used to authenticate API requests. Rows are created once at
registration and are read-only afterwards.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, SerializableMixin


class User(SerializableMixin, Base):
    """User account model."""

    __tablename__ = "user"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique user identifier",
    )

    name = Column(
        String(128),
        nullable=False,
        comment="Display name",
    )

    username = Column(
        String(128),
        unique=True,
        nullable=False,
        index=True,
        comment="Username for login",
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password (bcrypt)",
    )

    api_key = Column(
        String(32),
        unique=True,
        nullable=False,
        index=True,
        comment="Per-user API key sent in the X-API-Key header",
    )

    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def to_dict(self):
        """Public fields only; the password hash and API key are never serialized."""
        return {"id": self.id, "name": self.name, "username": self.username}

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
