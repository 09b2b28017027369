# riot/errors.py

from typing import Optional


class RiotAPIError(Exception):
    """Base exception for Riot API errors."""

    summary = "Riot API request failed"
    retryable = False

    def __init__(self, detail: str = "", status: Optional[int] = None):
        self.detail = detail
        self.status = status
        super().__init__(self.message)

    @property
    def message(self) -> str:
        head = self.summary if self.status is None else f"{self.summary} ({self.status})"
        return f"{head}: {self.detail}" if self.detail else head


class InvalidInputError(RiotAPIError):
    """Raised before any network call when the lookup input is malformed."""
    summary = "Invalid input"


class NotFoundError(RiotAPIError):
    summary = "Summoner not found"


class AuthError(RiotAPIError):
    """401/403 – the API key is missing, expired or lacks permissions."""
    summary = "API authentication failed, check RIOT_API_KEY"


class RateLimitError(RiotAPIError):
    """Raised when rate limit is exceeded and retry fails."""
    summary = "Rate limit exceeded"
    retryable = True


class UpstreamUnavailableError(RiotAPIError):
    summary = "Riot API unavailable"
    retryable = True


class NetworkError(RiotAPIError):
    summary = "Network error: unable to reach the Riot API"
    retryable = True


class UnclassifiedError(RiotAPIError):
    summary = "API request failed"


STATUS_ERRORS = {
    401: AuthError,
    403: AuthError,
    404: NotFoundError,
    429: RateLimitError,
    500: UpstreamUnavailableError,
    503: UpstreamUnavailableError,
}


def error_for_status(status: int, detail: str = "") -> RiotAPIError:
    """Map a non-200 HTTP status to its error class (unknown → UnclassifiedError)."""
    return STATUS_ERRORS.get(status, UnclassifiedError)(detail, status=status)
