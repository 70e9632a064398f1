"""
SQLAlchemy Base Configuration

Declarative base shared by all database models.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SerializableMixin:
    """Column-to-dict conversion for response bodies."""

    def to_dict(self):
        """Convert model to dictionary."""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
