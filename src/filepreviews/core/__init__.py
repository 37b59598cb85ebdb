"""Core functionality for filepreviews."""

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
from filepreviews.core.polling import BackoffPolicy, CancellationToken, MetadataPoller
from filepreviews.core.request import build_request_data, format_size
from filepreviews.core.signing import sign_url
from filepreviews.core.transport import HttpTransport

__all__ = [
    "FilePreviewsClient",
    "ClientConfig",
    "BackoffPolicy",
    "CancellationToken",
    "MetadataPoller",
    "HttpTransport",
    "FilePreviewsError",
    "ConfigurationError",
    "ContentError",
    "PollExhausted",
    "PreviewCancelledError",
    "RemoteRejection",
    "SigningError",
    "ThrottlingError",
    "TransportError",
    "build_request_data",
    "format_size",
    "sign_url",
]
