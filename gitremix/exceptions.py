"""git-remix exceptions."""

from typing import Optional

import httpx


class GitHubAPIError(httpx.HTTPError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the API
        detail: Response body text, truncated for logging
    """

    def __init__(self, message: str, *, status_code: int, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MalformedResponseError(ValueError):
    """Raised when a 2xx response is not JSON or misses required fields."""

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class RemixCancelledError(RuntimeError):
    """Raised when a run is cancelled or runs past its deadline."""


class RemixStepError(RuntimeError):
    """A fatal pipeline step failed.

    Attributes:
        user_message: Message returned to the caller as ``error``
        status_code: Response status class for the failure (400 or 500)
        cause: Underlying exception, if any
    """

    def __init__(self, user_message: str, *, status_code: int = 400, cause: Optional[Exception] = None) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.status_code = status_code
        self.cause = cause


__all__ = [
    "GitHubAPIError",
    "MalformedResponseError",
    "RemixCancelledError",
    "RemixStepError",
]
