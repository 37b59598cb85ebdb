"""Type definitions for the filepreviews library."""

from filepreviews.types.common import (
    Credentials,
    Metadata,
    PollState,
    PollStatus,
    PreviewJob,
    PreviewOptions,
    PreviewRequest,
    PreviewResult,
    SigningCredentials,
    Size,
)

__all__ = [
    "Credentials",
    "Metadata",
    "PollState",
    "PollStatus",
    "PreviewJob",
    "PreviewOptions",
    "PreviewRequest",
    "PreviewResult",
    "SigningCredentials",
    "Size",
]
