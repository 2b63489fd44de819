from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_REQUEST = "invalid_request"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_INTERNAL = "upstream_internal"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UNKNOWN = "unknown"
    INVALID_IDENTITY = "invalid_identity"
    NO_RANKED_DATA = "no_ranked_data"
    CONFIGURATION = "configuration"


# Canned messages used when the response body carries none
STATUS_MESSAGES = {
    400: "Bad Request - Invalid parameters",
    401: "Unauthorized - Invalid API key",
    403: "Forbidden - API key expired or invalid",
    404: "Not Found - Player not found",
    429: "Rate Limited - Too many requests",
    500: "Internal Server Error - Riot API issue",
    503: "Service Unavailable - Riot API maintenance",
}


class RiotAPIError(Exception):
    """Base exception for Riot API errors."""

    kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[ErrorKind] = None,
        http_status: Optional[int] = None,
    ):
        if kind is not None:
            self.kind = kind
        self.http_status = http_status
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self.kind.value!r}, "
            f"http_status={self.http_status!r}, message={self.message!r})"
        )


class TransportError(RiotAPIError):
    """Raised when a single HTTP call to the Riot API fails."""

    pass


class UnauthenticatedError(TransportError):
    """Raised when no API key is set or the key is rejected (401)."""

    kind = ErrorKind.UNAUTHENTICATED


class InvalidRequestError(TransportError):
    """Raised for 400 responses and unknown regions."""

    kind = ErrorKind.INVALID_REQUEST


class ForbiddenError(TransportError):
    """Raised for 403 responses."""

    kind = ErrorKind.FORBIDDEN


class PlayerNotFoundError(TransportError):
    """Raised when the requested resource is not found (404)."""

    kind = ErrorKind.NOT_FOUND


class RateLimitError(TransportError):
    """Raised when API rate limit is hit."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, *, retry_after: float = 1, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class APIUnavailableError(TransportError):
    """Raised when the API is down, erroring, or unreachable."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class InvalidRiotIdError(RiotAPIError):
    """Raised when a Riot ID is not in name#tag form."""

    kind = ErrorKind.INVALID_IDENTITY


class NoRankedDataError(RiotAPIError):
    """Raised when a player has no solo queue entry."""

    kind = ErrorKind.NO_RANKED_DATA


class ConfigurationError(RiotAPIError):
    """Raised when the real client is requested without an API key."""

    kind = ErrorKind.CONFIGURATION


def error_for_status(
    status: int, message: Optional[str] = None, retry_after: Optional[float] = None
) -> TransportError:
    """
    Build the typed error for a non-2xx HTTP status.

    Args:
        status: HTTP status code
        message: Server supplied message, if any
        retry_after: Seconds from the Retry-After header (429 only)

    Returns:
        TransportError subclass matching the status
    """
    message = message or STATUS_MESSAGES.get(status, f"API Error {status}")

    if status == 400:
        return InvalidRequestError(message, http_status=status)
    if status == 401:
        return UnauthenticatedError(message, http_status=status)
    if status == 403:
        return ForbiddenError(message, http_status=status)
    if status == 404:
        return PlayerNotFoundError(message, http_status=status)
    if status == 429:
        return RateLimitError(
            message,
            retry_after=retry_after if retry_after is not None else 1,
            http_status=status,
        )
    if status == 500:
        return APIUnavailableError(
            message, kind=ErrorKind.UPSTREAM_INTERNAL, http_status=status
        )
    if status == 503:
        return APIUnavailableError(message, http_status=status)
    return TransportError(message, kind=ErrorKind.UNKNOWN, http_status=status)
