"""Custom exceptions for the filepreviews library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from filepreviews.types.common import PollStatus


class FilePreviewsError(Exception):
    """Base exception for all filepreviews errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(FilePreviewsError):
    """Raised when the client is constructed with invalid configuration."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid configuration: {details}")


class TransportError(FilePreviewsError):
    """Raised when the API could not be reached at the network level."""

    def __init__(self, url: str, details: str | None = None) -> None:
        self.url = url
        message = f"Request to '{url}' failed"
        if details:
            message += f": {details}"
        super().__init__(message)


class RemoteRejection(FilePreviewsError):
    """Raised when the API answers a submission or retrieval with a non-2xx status."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request error {status_code}: {body}")


class ThrottlingError(RemoteRejection):
    """Raised when the API rejects a request with HTTP 429."""

    def __init__(self, body: Any, retry_after: int | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(429, body)
        self.message = "Throttling error, try later"
        if retry_after:
            self.message += f" (retry after {retry_after}s)"
        self.args = (self.message,)


class ContentError(FilePreviewsError):
    """Raised when the metadata document itself reports an error.

    ``status`` is the final poll status when raised by the poller.
    """

    def __init__(
        self,
        error: Any,
        url: str | None = None,
        status: PollStatus | None = None,
    ) -> None:
        self.error = error
        self.url = url
        self.status = status
        message = f"Preview generation failed: {error}"
        if url:
            message += f" ({url})"
        super().__init__(message)


class PollExhausted(FilePreviewsError):
    """Raised when metadata is still unavailable after the retry budget.

    ``status`` tells a budget spent on "not ready" answers (``exhausted``)
    from one whose final attempt failed in transport (``transport_error``).
    """

    def __init__(
        self,
        attempts: int,
        elapsed: float,
        last_error: FilePreviewsError | None = None,
        status: PollStatus | None = None,
    ) -> None:
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_error = last_error
        self.status = status
        message = f"Metadata not available after {attempts} attempts ({elapsed:.1f}s)"
        if last_error is not None:
            message += f": last attempt failed with {last_error}"
        super().__init__(message)


class PreviewCancelledError(FilePreviewsError):
    """Raised when a pending operation is cancelled through its token."""

    def __init__(self, url: str, attempts: int, status: PollStatus | None = None) -> None:
        self.url = url
        self.attempts = attempts
        self.status = status
        super().__init__(f"Polling for '{url}' cancelled after {attempts} attempts")


class SigningError(FilePreviewsError):
    """Raised when a URL cannot be split into bucket and resource for signing."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Cannot sign '{url}': expected scheme://host/bucket/resource")
