"""
Services Package

Data access and business logic for the Task API.
"""

from .task_gateway import TaskGateway
from .task_planner import UpdatePlan, plan_update
from .task_validation import get_validation_errors
from .user_directory import UserDirectory

__all__ = [
    "TaskGateway",
    "UpdatePlan",
    "plan_update",
    "get_validation_errors",
    "UserDirectory",
]
