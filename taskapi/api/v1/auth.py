"""
Authentication Endpoints

User registration, login and the current-user profile.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import ValidationError

from taskapi.auth import verify_password
from taskapi.auth.dependencies import get_token_codec, get_user_directory, require_user_id
from taskapi.auth.token_codec import TokenCodec
from taskapi.dependencies import read_json_body
from taskapi.exceptions import InvalidCredentialError, MissingCredentialError, NotFoundError
from taskapi.logging_config import get_logger, mask_credential
from taskapi.schemas.auth import (
    TokenResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserRegisterResponse,
    UserResponse,
)
from taskapi.services.user_directory import UserDirectory

logger = get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=UserRegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserRegisterRequest,
    user_directory: UserDirectory = Depends(get_user_directory),
):
    """
    Register a new user account.

    The generated API key is returned once, in this response.
    """
    user = await user_directory.register(data.name, data.username, data.password)

    logger.info("API key issued", user_id=user.id, api_key=mask_credential(user.api_key))

    return UserRegisterResponse(api_key=user.api_key)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: Any = Depends(read_json_body),
    user_directory: UserDirectory = Depends(get_user_directory),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Exchange a username and password for an access token.
    """
    try:
        data = UserLoginRequest.model_validate(payload)
    except ValidationError as e:
        raise MissingCredentialError("Missing login credentials") from e

    if not data.username or not data.password:
        raise MissingCredentialError("Missing login credentials")

    user = await user_directory.find_by_username(data.username)

    if user is None or not verify_password(data.password, user.password_hash):
        logger.warning("Login failed", username=data.username)
        raise InvalidCredentialError("Invalid authentication")

    access_token = codec.issue_access_token(user.id, user.name)

    logger.info("User logged in", user_id=user.id, username=user.username)

    return TokenResponse(
        access_token=access_token,
        expires_in=codec.expire_minutes * 60,
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user_id: int = Depends(require_user_id),
    user_directory: UserDirectory = Depends(get_user_directory),
):
    """
    Get current authenticated user information.
    """
    user = await user_directory.find_by_id(user_id)
    if user is None:
        # Token outlived its account
        raise NotFoundError("User", str(user_id))

    return user.to_dict()
