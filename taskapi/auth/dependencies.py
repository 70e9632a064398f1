"""
Authentication Dependencies

FastAPI dependencies wiring the token codec, user directory and
authenticator into request handling.
"""

from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.auth.authenticator import (
    AccessTokenStrategy,
    APIKeyStrategy,
    Authenticator,
    CredentialStrategy,
)
from taskapi.auth.credentials import AUTHORIZATION_HEADER, get_header
from taskapi.auth.token_codec import TokenCodec
from taskapi.config import Settings, get_settings, settings
from taskapi.database import get_db
from taskapi.logging_config import get_logger
from taskapi.services.user_directory import UserDirectory

logger = get_logger(__name__)

# Security schemes for OpenAPI documentation only; extraction and error
# reporting are done by the authenticator itself
api_key_scheme = APIKeyHeader(
    name=settings.API_KEY_HEADER,
    auto_error=False,
    description="Per-user API key returned at registration",
)
bearer_scheme = HTTPBearer(auto_error=False, description="Access token from /api/login")


@lru_cache
def get_token_codec() -> TokenCodec:
    """
    Process-wide token codec, built once from settings.

    Usage:
        @router.post("/login")
        async def login(codec: TokenCodec = Depends(get_token_codec)):
            ...
    """
    return TokenCodec(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


async def get_user_directory(db: AsyncSession = Depends(get_db)) -> UserDirectory:
    """Dependency to get UserDirectory instance"""
    return UserDirectory(db)


def select_strategy(
    request: Request,
    app_settings: Settings,
    user_directory: UserDirectory,
    codec: TokenCodec,
) -> CredentialStrategy:
    """
    Pick the single strategy used for this request.

    ``auto`` uses the access token when an Authorization header is present and
    the API key otherwise.
    """
    mode = app_settings.AUTH_STRATEGY
    if mode == "auto":
        has_authorization = get_header(request.headers, AUTHORIZATION_HEADER) is not None
        mode = "access_token" if has_authorization else "api_key"

    logger.debug("Authentication strategy selected", strategy=mode, path=request.url.path)

    if mode == "access_token":
        return AccessTokenStrategy(codec)
    return APIKeyStrategy(user_directory, header_name=app_settings.API_KEY_HEADER)


async def get_authenticator(
    request: Request,
    app_settings: Settings = Depends(get_settings),
    user_directory: UserDirectory = Depends(get_user_directory),
    codec: TokenCodec = Depends(get_token_codec),
) -> Authenticator:
    """Fresh authenticator for the current request"""
    return Authenticator(select_strategy(request, app_settings, user_directory, codec))


async def require_user_id(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
    _api_key: str = Depends(api_key_scheme),
    _bearer=Depends(bearer_scheme),
) -> int:
    """
    Require an authenticated user and return its id

    Rejections surface as 400 (missing or malformed credential) or
    401 (invalid credential) through the global exception handlers.

    Example:
        @router.get("/tasks")
        async def list_tasks(user_id: int = Depends(require_user_id)):
            ...
    """
    user_id = await authenticator.require(request.headers)
    request.state.user_id = user_id
    return user_id
