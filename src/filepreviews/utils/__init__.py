"""Utility functions for filepreviews."""

from filepreviews.utils.logging import DebugLogger, configure_logging, mask_signed_url

__all__ = [
    "DebugLogger",
    "configure_logging",
    "mask_signed_url",
]
