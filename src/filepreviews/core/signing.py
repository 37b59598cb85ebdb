"""Query-string signing for result URLs stored in a private S3 bucket.

Results of a preview job can be written to a bucket the API owner controls.
When that bucket is private, metadata is fetched through a time-limited
query-string signed URL (S3 signature version 2) instead of basic auth.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import TYPE_CHECKING, Final
from urllib.parse import quote, urlsplit

from filepreviews.core.exceptions import SigningError

if TYPE_CHECKING:
    from filepreviews.types.common import SigningCredentials

# Signed URLs stay valid for one hour
SIGNED_URL_TTL: Final = 3600


def split_bucket_url(url: str) -> tuple[str, str, str]:
    """Split a ``scheme://host/bucket/resource...`` URL.

    Args:
        url: Object URL

    Returns:
        Tuple of (scheme and host, bucket, resource path)

    Raises:
        SigningError: If the URL has no bucket or no resource segment
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise SigningError(url)

    bucket, _, resource = parts.path.lstrip("/").partition("/")
    if not bucket or not resource.strip("/"):
        raise SigningError(url)

    return f"{parts.scheme}://{parts.netloc}", bucket, resource


def compute_signature(secret_key: str, bucket: str, resource: str, expires: int) -> str:
    """Compute the URL-safe HMAC-SHA1 signature for a GET of ``/bucket/resource``."""
    string_to_sign = f"GET\n\n\n{expires}\n/{bucket}/{resource}"
    digest = hmac.new(
        secret_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return quote(base64.b64encode(digest).decode("ascii"), safe="")


def sign_url(
    url: str,
    credentials: SigningCredentials | None,
    now: float,
) -> str:
    """Return a URL the private bucket will authorize for the next hour.

    Args:
        url: Object URL to sign
        credentials: Signing credentials, or None to leave the URL untouched
        now: Current time as seconds since the epoch

    Returns:
        The signed URL, or ``url`` itself when no credentials are given

    Raises:
        SigningError: If the URL cannot be split into bucket and resource

    Example:
        >>> sign_url("https://s3.amazonaws.com/bucket/a/metadata.json", creds, 1400000000)
        'https://s3.amazonaws.com/bucket/a/metadata.json?AWSAccessKeyId=...&Expires=1400003600&Signature=...'
    """
    if credentials is None:
        return url

    _, bucket, resource = split_bucket_url(url)
    expires = int(now) + SIGNED_URL_TTL
    signature = compute_signature(credentials.secret_key, bucket, resource, expires)

    separator = "&" if urlsplit(url).query else "?"
    return (
        f"{url}{separator}AWSAccessKeyId={quote(credentials.access_key_id, safe='')}"
        f"&Expires={expires}&Signature={signature}"
    )
