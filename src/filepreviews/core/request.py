"""Request body formatting for preview job submission."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from filepreviews.types.common import PreviewOptions, PreviewRequest, Size


def format_size(size: Size) -> str:
    """Collapse a size into the API's ``WIDTHxHEIGHT`` notation.

    Examples:
        >>> format_size(Size(width=1, height=2))
        '1x2'
        >>> format_size(Size(width=1))
        '1'
        >>> format_size(Size(height=2))
        'x2'
        >>> format_size(Size(width=0, height=2))
        '0x2'
    """
    value = ""
    if size.width is not None:
        value = str(size.width)
    if size.height is not None:
        value = f"{value}x{size.height}"
    return value


def build_request_data(url: str, options: PreviewOptions | None = None) -> dict[str, Any]:
    """Build the JSON body for a new preview job.

    Args:
        url: URL of the source file
        options: Job options

    Returns:
        Request body for ``POST /previews/``
    """
    data: dict[str, Any] = {"url": url}
    if options is None:
        return data

    if options.metadata is not None:
        data["metadata"] = list(options.metadata)
    if options.size is not None:
        data["sizes"] = [format_size(options.size)]
    if options.format is not None:
        data["format"] = options.format
    if options.pages is not None:
        data["pages"] = options.pages
    if options.data is not None:
        data["data"] = options.data

    for key, value in options.extra.items():
        data.setdefault(key, value)

    return data


def build_payload(request: PreviewRequest) -> dict[str, Any]:
    """Build the JSON body for a PreviewRequest."""
    return build_request_data(request.url, request.options)
