"""
Request Authenticator

Decides, for one request, whether it carries valid credentials and which user
they identify. Two credential strategies share one outcome type:

- APIKeyStrategy: ``X-API-Key`` looked up in the user directory
- AccessTokenStrategy: ``Authorization: Bearer <token>`` verified by the codec

An Authenticator is created per request and runs exactly one strategy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping, Optional, Union

from taskapi.auth.credentials import (
    API_KEY_HEADER,
    MalformedAuthorizationHeader,
    extract_api_key,
    extract_bearer_token,
)
from taskapi.auth.token_codec import (
    InvalidPayloadError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenCodec,
    TokenExpiredError,
)
from taskapi.exceptions import (
    AppException,
    InvalidCredentialError,
    MalformedCredentialError,
    MissingCredentialError,
)
from taskapi.logging_config import get_logger

if TYPE_CHECKING:
    from taskapi.services.user_directory import UserDirectory

logger = get_logger(__name__)


class RejectionReason(str, Enum):
    """Why a request was refused; each maps to one HTTP status."""
    MISSING_CREDENTIAL = "missing_credential"
    MALFORMED_CREDENTIAL = "malformed_credential"
    INVALID_CREDENTIAL = "invalid_credential"

    @property
    def status_code(self) -> int:
        return 401 if self is RejectionReason.INVALID_CREDENTIAL else 400


@dataclass(frozen=True)
class Authenticated:
    """Successful outcome carrying the resolved user id."""
    user_id: int


@dataclass(frozen=True)
class Rejected:
    """Failed outcome with a client-facing message."""
    reason: RejectionReason
    message: str

    def to_exception(self) -> AppException:
        if self.reason is RejectionReason.MISSING_CREDENTIAL:
            return MissingCredentialError(self.message)
        if self.reason is RejectionReason.MALFORMED_CREDENTIAL:
            return MalformedCredentialError(self.message)
        return InvalidCredentialError(self.message)


AuthOutcome = Union[Authenticated, Rejected]


class AuthenticationStateError(RuntimeError):
    """The resolved user id was read without a successful authentication."""


class CredentialStrategy(ABC):
    """One way of turning request headers into an authentication outcome."""

    name: str = "strategy"

    @abstractmethod
    async def verify(self, headers: Mapping[str, str]) -> AuthOutcome:
        """Check the request headers and return Authenticated or Rejected."""


class APIKeyStrategy(CredentialStrategy):
    """Authenticate with a per-user API key."""

    name = "api_key"

    def __init__(self, user_directory: "UserDirectory", header_name: str = API_KEY_HEADER):
        self.user_directory = user_directory
        self.header_name = header_name

    async def verify(self, headers: Mapping[str, str]) -> AuthOutcome:
        credential = extract_api_key(headers, self.header_name)
        if credential is None:
            return Rejected(RejectionReason.MISSING_CREDENTIAL, "Missing API key")

        user = await self.user_directory.find_by_api_key(credential.value)
        if user is None:
            return Rejected(RejectionReason.INVALID_CREDENTIAL, "Invalid API key")

        return Authenticated(user.id)


class AccessTokenStrategy(CredentialStrategy):
    """Authenticate with a signed bearer access token."""

    name = "access_token"

    def __init__(self, codec: TokenCodec):
        self.codec = codec

    async def verify(self, headers: Mapping[str, str]) -> AuthOutcome:
        try:
            credential = extract_bearer_token(headers)
        except MalformedAuthorizationHeader:
            credential = None

        if credential is None:
            return Rejected(RejectionReason.MALFORMED_CREDENTIAL, "Incomplete authorization header")

        try:
            claims = self.codec.decode(credential.value)
        except InvalidSignatureError:
            return Rejected(RejectionReason.INVALID_CREDENTIAL, "Invalid signature")
        except TokenExpiredError:
            return Rejected(RejectionReason.INVALID_CREDENTIAL, "Token has expired")
        except (MalformedTokenError, InvalidPayloadError) as e:
            return Rejected(RejectionReason.MALFORMED_CREDENTIAL, str(e))

        return Authenticated(claims["sub"])


class Authenticator:
    """
    Request-scoped authentication state.

    Usage:
        authenticator = Authenticator(APIKeyStrategy(UserDirectory(db)))
        user_id = await authenticator.require(request.headers)
    """

    def __init__(self, strategy: CredentialStrategy):
        self.strategy = strategy
        self._user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    @property
    def user_id(self) -> int:
        """The authenticated user's id.

        Raises:
            AuthenticationStateError: if no authentication has succeeded
        """
        if self._user_id is None:
            raise AuthenticationStateError("No authenticated user for this request")
        return self._user_id

    async def authenticate(self, headers: Mapping[str, str]) -> AuthOutcome:
        """Run the strategy and record the identity on success."""
        self._user_id = None
        outcome = await self.strategy.verify(headers)

        if isinstance(outcome, Authenticated):
            self._user_id = outcome.user_id
            logger.debug("Request authenticated", strategy=self.strategy.name, user_id=outcome.user_id)
        else:
            logger.warning(
                "Authentication rejected",
                strategy=self.strategy.name,
                reason=outcome.reason.value,
            )

        return outcome

    async def require(self, headers: Mapping[str, str]) -> int:
        """Authenticate or raise the HTTP error matching the rejection.

        Raises:
            MissingCredentialError: 400
            MalformedCredentialError: 400
            InvalidCredentialError: 401
        """
        outcome = await self.authenticate(headers)
        if isinstance(outcome, Rejected):
            raise outcome.to_exception()
        return outcome.user_id
