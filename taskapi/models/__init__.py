"""
Database Models Package

SQLAlchemy ORM models for the Task API.
"""

from .base import Base
from .user import User
from .task import Task

__all__ = [
    "Base",
    "User",
    "Task",
]
