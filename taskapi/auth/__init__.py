"""
Authentication Package

API key and signed access token authentication for the Task API.
"""

from .credentials import (
    Credential,
    CredentialKind,
    MalformedAuthorizationHeader,
    extract_api_key,
    extract_bearer_token,
)
from .token_codec import (
    TokenCodec,
    TokenError,
    MalformedTokenError,
    InvalidSignatureError,
    InvalidPayloadError,
    TokenExpiredError,
)
from .authenticator import (
    Authenticator,
    AuthenticationStateError,
    Authenticated,
    Rejected,
    RejectionReason,
    CredentialStrategy,
    APIKeyStrategy,
    AccessTokenStrategy,
)
from .password import verify_password, hash_password, generate_api_key

__all__ = [
    # Credential extraction
    "Credential",
    "CredentialKind",
    "MalformedAuthorizationHeader",
    "extract_api_key",
    "extract_bearer_token",
    # Token codec
    "TokenCodec",
    "TokenError",
    "MalformedTokenError",
    "InvalidSignatureError",
    "InvalidPayloadError",
    "TokenExpiredError",
    # Authenticator
    "Authenticator",
    "AuthenticationStateError",
    "Authenticated",
    "Rejected",
    "RejectionReason",
    "CredentialStrategy",
    "APIKeyStrategy",
    "AccessTokenStrategy",
    # Password and API keys
    "verify_password",
    "hash_password",
    "generate_api_key",
]
