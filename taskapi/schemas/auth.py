"""
Authentication Schemas

Pydantic models for registration and login request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRegisterRequest(BaseModel):
    """User registration request"""

    name: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Display name",
        examples=["Jane Doe"],
    )
    username: str = Field(
        ...,
        min_length=3,
        max_length=128,
        pattern="^[a-zA-Z0-9_.-]+$",
        description="Username (alphanumeric, dots, hyphens, underscores)",
        examples=["jane_doe"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (8-72 characters)",
        examples=["SecurePass123!"],
    )


class UserRegisterResponse(BaseModel):
    """User registration response, the only place an API key is shown"""

    message: str = Field(
        default="Thank you for registering",
        description="Success message",
    )
    api_key: str = Field(
        ...,
        description="API key to send in the X-API-Key header",
    )


class UserLoginRequest(BaseModel):
    """
    User login request

    Fields are optional so that a missing credential is answered with the
    login endpoint's own 400 rather than a schema error.
    """

    username: Optional[str] = Field(
        default=None,
        description="Username",
        examples=["jane_doe"],
    )
    password: Optional[str] = Field(
        default=None,
        description="User password",
        examples=["SecurePass123!"],
    )


class TokenResponse(BaseModel):
    """Token response"""

    access_token: str = Field(
        ...,
        description="Signed access token",
    )
    token_type: str = Field(
        default="bearer",
        description="Token type",
    )
    expires_in: int = Field(
        ...,
        description="Access token lifetime in seconds",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 18000,
            }
        }
    )


class UserResponse(BaseModel):
    """Public profile of the authenticated user"""

    id: int
    name: str
    username: str

    model_config = ConfigDict(from_attributes=True)
