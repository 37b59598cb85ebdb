"""Diagnostic logging helpers."""

from __future__ import annotations

import logging
import re
from typing import Any, Final

# Query parameters that authorize a signed URL
SIGNED_URL_PARAM_PATTERN: Final = re.compile(r"(AWSAccessKeyId|Signature)=[^&]+")


def mask_signed_url(url: str) -> str:
    """Mask signing parameters in a URL for logging.

    Args:
        url: URL that may carry a signature

    Returns:
        URL with access key and signature masked
    """
    return SIGNED_URL_PARAM_PATTERN.sub(r"\1=***", url)


class DebugLogger:
    """Logger wrapper that only emits when a client's debug flag is set.

    Each client owns one, so clients with different ``debug`` settings can
    share the same module loggers without affecting each other.
    """

    def __init__(self, logger: logging.Logger, enabled: bool = False) -> None:
        self.logger = logger
        self.enabled = enabled

    def debug(self, msg: str, *args: Any) -> None:
        if self.enabled:
            self.logger.debug(msg, *args)

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802
        return self.enabled and self.logger.isEnabledFor(level)


def configure_logging(debug: bool = False) -> None:
    """Send filepreviews log output to stderr.

    Intended for scripts and examples; libraries embedding the client should
    configure logging themselves.

    Args:
        debug: Emit DEBUG records when True, WARNING and above otherwise
    """
    package_logger = logging.getLogger("filepreviews")
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        package_logger.addHandler(handler)
