"""Common type definitions used across the filepreviews library.

These types describe what goes over the wire to the FilePreviews API and
what comes back once a preview has been generated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# Opaque metadata document returned by the API once processing completes
Metadata = dict[str, Any]


@dataclass(frozen=True)
class Size:
    """Requested preview dimensions.

    Attributes:
        width: Width in pixels
        height: Height in pixels
    """

    width: int | None = None
    height: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Size:
        """Create a Size from a ``{"width": ..., "height": ...}`` mapping."""
        return cls(width=data.get("width"), height=data.get("height"))


@dataclass
class PreviewOptions:
    """Per-call options for a preview job.

    Attributes:
        metadata: Metadata fields to extract (e.g. ["exif", "ocr", "psd"])
        size: Desired preview size
        format: Output format hint (e.g. "jpg", "png")
        pages: Page selection (e.g. "1-3")
        data: Opaque user data echoed back by the API
        extra: Any other provider-specific fields, sent verbatim
    """

    metadata: list[str] | None = None
    size: Size | None = None
    format: str | None = None
    pages: str | None = None
    data: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PreviewOptions:
        """Create options from a plain mapping.

        Unknown keys are kept in ``extra`` and sent to the API untouched.
        """
        data = dict(data)
        size = data.pop("size", None)
        if isinstance(size, dict):
            size = Size.from_dict(size)

        return cls(
            metadata=data.pop("metadata", None),
            size=size,
            format=data.pop("format", None),
            pages=data.pop("pages", None),
            data=data.pop("data", None),
            extra=data,
        )


@dataclass(frozen=True)
class PreviewRequest:
    """A single preview job request, built fresh for every call.

    Attributes:
        url: URL of the source file
        options: Job options
    """

    url: str
    options: PreviewOptions | None = None


@dataclass(frozen=True)
class Credentials:
    """API credentials sent as HTTP basic auth on every request."""

    api_key: str
    api_secret: str


@dataclass(frozen=True)
class SigningCredentials:
    """Object storage credentials used to sign result URLs."""

    access_key_id: str
    secret_key: str


class PollStatus(StrEnum):
    """States of a metadata poll."""

    IDLE = "idle"
    WAITING = "waiting"
    REQUESTING = "requesting"
    SUCCESS = "success"
    CONTENT_ERROR = "content_error"
    EXHAUSTED = "exhausted"
    TRANSPORT_ERROR = "transport_error"
    CANCELLED = "cancelled"


@dataclass
class PollState:
    """In-flight state of a single metadata poll.

    Attributes:
        target_url: Metadata URL being polled
        attempts: Number of the attempt about to be made (starts at 1)
        delay: Seconds to wait before the next attempt
        started_at: Clock reading when polling started
        status: Current state of the poll
    """

    target_url: str
    attempts: int = 1
    delay: float = 1.0
    started_at: float = 0.0
    status: PollStatus = PollStatus.IDLE


@dataclass
class PreviewJob:
    """Handle for a submitted preview job.

    Attributes:
        id: Job ID assigned by the API
        status: Job status reported at submission time
        metadata_url: URL to poll for the metadata document
        preview_url: URL of the generated preview artifact
        raw: Raw submission response
    """

    id: str | None
    status: str | None
    metadata_url: str | None
    preview_url: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> PreviewJob:
        """Create a job handle from a submission response.

        Accepts both the flat ``metadata_url``/``preview_url`` shape and the
        nested ``preview: {url, metadata_url}`` shape of the v2 API.
        """
        preview = data.get("preview") or {}
        if not isinstance(preview, dict):
            preview = {}

        job_id = data.get("id")
        return cls(
            id=str(job_id) if job_id is not None else None,
            status=data.get("status"),
            metadata_url=data.get("metadata_url") or preview.get("metadata_url"),
            preview_url=data.get("preview_url") or preview.get("url"),
            raw=data,
        )


@dataclass
class PreviewResult:
    """Result of a completed preview generation.

    Attributes:
        metadata: Metadata document for the generated preview
        metadata_url: URL the metadata was fetched from
        preview_url: URL of the preview artifact
    """

    metadata: Metadata
    metadata_url: str
    preview_url: str | None
