"""
API v1 Package

REST API endpoints for the Task API
"""

from . import health
from . import auth
from . import tasks

__all__ = ["health", "auth", "tasks"]
