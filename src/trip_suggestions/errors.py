"""Failure taxonomy for the suggestion broker.

Upstream errors describe a single call to the suggestion agent. The broker
decides which of them are worth one retry and raises ``SuggestionUnavailable``
once its attempts are exhausted.
"""


class SuggestionError(Exception):
    """Base class for all suggestion broker failures."""


class UpstreamError(SuggestionError):
    """Raised when a call to the suggestion agent fails."""


class UpstreamTimeout(UpstreamError):
    """Raised when the agent does not answer within the configured timeout."""


class UpstreamInvalidResponse(UpstreamError):
    """Raised when the agent reply does not match the expected shape."""


class UpstreamTransientError(UpstreamError):
    """Raised on network failures and retryable HTTP statuses (5xx, 429)."""


class UpstreamRejectedRequest(UpstreamError):
    """Raised when the agent refuses the request (non-retryable 4xx)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SuggestionUnavailable(SuggestionError):
    """Raised when no valid suggestions could be obtained after retrying."""


RETRYABLE_ERRORS = (UpstreamInvalidResponse, UpstreamTransientError)
