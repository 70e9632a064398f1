"""
Access Token Codec

Encodes and verifies HMAC-signed access tokens
(``base64url(header).base64url(payload).base64url(signature)``).

Signing and signature comparison are delegated to python-jose, which compares
MACs in constant time. Decoding distinguishes why a token was refused so the
authenticator can answer 400 for garbage and 401 for forgeries:

- MalformedTokenError: not three non-empty base64url segments in canonical
  form, or the header is not a JSON object
- InvalidSignatureError: the MAC does not match (or the header names an
  algorithm other than the configured one), or the signature segment is not
  canonical base64url
- InvalidPayloadError: the payload is not a JSON object, or ``sub`` is missing
  or not an integer
- TokenExpiredError: ``exp`` is in the past
"""

import base64
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

from jose import jws, jwt
from jose.exceptions import ExpiredSignatureError, JWSError, JWTError

from taskapi.logging_config import get_logger

logger = get_logger(__name__)

SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")

# Only expiry is checked; sub is validated here since it must be integer-like
DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": True,
    "verify_aud": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
    "require_exp": False,
    "leeway": 0,
}


class TokenError(Exception):
    """Base class for token decoding failures."""


class MalformedTokenError(TokenError):
    """Token is not structurally a signed three-part token."""


class InvalidSignatureError(TokenError):
    """Token signature does not match its header and payload."""


class InvalidPayloadError(TokenError):
    """Token payload is not a JSON object or lacks a usable subject claim."""


class TokenExpiredError(TokenError):
    """Token expiry claim is in the past."""


def _is_base64url_segment(segment: str) -> bool:
    # A base64 group of 4 characters can never end with a single leftover char
    return SEGMENT_PATTERN.fullmatch(segment) is not None and len(segment) % 4 != 1


def _is_canonical_segment(segment: str) -> bool:
    # Base64 decoding ignores the unused low bits of the last character, so
    # several spellings decode to the same bytes; only the re-encoded one counts
    decoded = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    return base64.urlsafe_b64encode(decoded).rstrip(b"=").decode("ascii") == segment


def _parse_subject(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidPayloadError("Subject claim must be an integer user id")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise InvalidPayloadError("Subject claim must be an integer user id")


class TokenCodec:
    """
    Signs and verifies access tokens with a process-wide secret.

    Build one instance at startup and share it; it holds no mutable state.

    Example:
        codec = TokenCodec(settings.SECRET_KEY)
        token = codec.issue_access_token(user.id, user.name)
        claims = codec.decode(token)  # claims["sub"] == user.id
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 300):
        if not secret_key:
            raise ValueError("Token codec requires a non-empty secret key")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def __repr__(self) -> str:
        return f"<TokenCodec(algorithm={self.algorithm})>"

    def encode(self, claims: Mapping[str, Any]) -> str:
        """
        Sign a claims mapping.

        Datetime values of exp/iat/nbf are converted to Unix timestamps.
        """
        return jwt.encode(dict(claims), self._secret_key, algorithm=self.algorithm)

    def issue_access_token(
        self,
        user_id: int,
        name: str,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create an access token for a user.

        Args:
            user_id: Subject of the token
            name: Display name, carried for clients only
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded token string
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "name": name,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expire_minutes),
        }
        token = self.encode(claims)

        logger.debug(
            "Access token issued",
            user_id=user_id,
            expires_in_minutes=self.expire_minutes,
        )
        return token

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify a token and return its claims with ``sub`` as an int.

        Raises:
            MalformedTokenError, InvalidSignatureError,
            InvalidPayloadError, TokenExpiredError
        """
        segments = token.split(".")
        if len(segments) != 3 or not all(_is_base64url_segment(s) for s in segments):
            raise MalformedTokenError("Invalid token format")

        header_segment, payload_segment, signature_segment = segments
        if not (_is_canonical_segment(header_segment) and _is_canonical_segment(payload_segment)):
            raise MalformedTokenError("Invalid token format")
        if not _is_canonical_segment(signature_segment):
            raise InvalidSignatureError("Invalid signature")

        try:
            jws.get_unverified_header(token)
        except JWSError as e:
            raise MalformedTokenError("Invalid token header") from e

        try:
            jws.verify(token, self._secret_key, algorithms=[self.algorithm])
        except JWSError as e:
            raise InvalidSignatureError("Invalid signature") from e

        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options=DECODE_OPTIONS,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise InvalidPayloadError(f"Invalid token payload: {e}") from e

        if "sub" not in claims:
            raise InvalidPayloadError("Token payload is missing the subject claim")

        claims["sub"] = _parse_subject(claims["sub"])
        return claims
