"""
filepreviews: An asynchronous client for the FilePreviews API.

Submit a file URL, let the API render previews and extract metadata, and
wait for the result with linear backoff. Results stored in a private S3
bucket are fetched through signed URLs.

Example usage:
    from filepreviews import ClientConfig, FilePreviewsClient

    config = ClientConfig(api_key="...", api_secret="...")

    async with FilePreviewsClient(config) as client:
        result = await client.generate("http://example.com/file.pdf")
        print(result.preview_url)
"""

__version__ = "2.0.0"

from filepreviews.core.client import FilePreviewsClient
from filepreviews.core.config import ClientConfig
from filepreviews.core.exceptions import (
    ConfigurationError,
    ContentError,
    FilePreviewsError,
    PollExhausted,
    PreviewCancelledError,
    RemoteRejection,
    SigningError,
    ThrottlingError,
    TransportError,
)
from filepreviews.core.polling import BackoffPolicy, CancellationToken
from filepreviews.core.signing import sign_url
from filepreviews.types.common import (
    PollStatus,
    PreviewJob,
    PreviewOptions,
    PreviewResult,
    Size,
)
from filepreviews.utils.logging import configure_logging

__all__ = [
    # Core
    "ClientConfig",
    "FilePreviewsClient",
    "BackoffPolicy",
    "CancellationToken",
    # Exceptions
    "FilePreviewsError",
    "ConfigurationError",
    "ContentError",
    "PollExhausted",
    "PreviewCancelledError",
    "RemoteRejection",
    "SigningError",
    "ThrottlingError",
    "TransportError",
    # Utilities
    "configure_logging",
    "sign_url",
    # Types
    "PollStatus",
    "PreviewJob",
    "PreviewOptions",
    "PreviewResult",
    "Size",
]
