"""
Credential Extraction

Reads raw credential material from request headers. Nothing here touches the
database or validates the credential; it only answers "what did the client
send?".
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

API_KEY_HEADER = "X-API-Key"
AUTHORIZATION_HEADER = "Authorization"

# Case-sensitive scheme, one or more whitespace separators, non-empty token
BEARER_PATTERN = re.compile(r"^Bearer\s+(\S+)$")


class CredentialKind(str, Enum):
    """Kind of credential carried by a request."""
    API_KEY = "api_key"
    BEARER_TOKEN = "bearer_token"


@dataclass(frozen=True)
class Credential:
    """A credential as sent by the client. The value is kept out of repr()."""
    kind: CredentialKind
    value: str = field(repr=False)


class MalformedAuthorizationHeader(ValueError):
    """The Authorization header is present but is not ``Bearer <token>``."""


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that works for plain dicts too."""
    value = headers.get(name)
    if value is not None:
        return value
    wanted = name.lower()
    for key, candidate in headers.items():
        if key.lower() == wanted:
            return candidate
    return None


def extract_api_key(
    headers: Mapping[str, str],
    header_name: str = API_KEY_HEADER,
) -> Optional[Credential]:
    """Return the API key credential, or None when the header is absent or empty."""
    value = get_header(headers, header_name)
    if not value:
        return None
    return Credential(CredentialKind.API_KEY, value)


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[Credential]:
    """
    Return the bearer token credential, or None when no Authorization header
    was sent.

    Raises:
        MalformedAuthorizationHeader: header present but not ``Bearer <token>``
    """
    value = get_header(headers, AUTHORIZATION_HEADER)
    if value is None:
        return None

    match = BEARER_PATTERN.match(value.strip())
    if not match:
        raise MalformedAuthorizationHeader("Authorization header must be 'Bearer <token>'")

    return Credential(CredentialKind.BEARER_TOKEN, match.group(1))
