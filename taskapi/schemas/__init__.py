"""Pydantic schemas for API request/response validation"""

from .task import (
    TaskResponse,
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskCreatedResponse,
    TaskRowsResponse,
)

from .auth import (
    UserRegisterRequest,
    UserRegisterResponse,
    UserLoginRequest,
    TokenResponse,
    UserResponse,
)

__all__ = [
    "TaskResponse",
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "TaskCreatedResponse",
    "TaskRowsResponse",
    "UserRegisterRequest",
    "UserRegisterResponse",
    "UserLoginRequest",
    "TokenResponse",
    "UserResponse",
]
