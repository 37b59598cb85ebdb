"""Tests for signed result URLs."""

import base64
import hashlib
import hmac
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from filepreviews.core.exceptions import SigningError
from filepreviews.core.signing import SIGNED_URL_TTL, sign_url, split_bucket_url
from filepreviews.types.common import SigningCredentials

URL = "https://s3.amazonaws.com/private-bucket/abc123/metadata.json"
NOW = 1_400_000_000


@pytest.fixture
def credentials():
    return SigningCredentials(access_key_id="AKIAEXAMPLE", secret_key="s3-secret")


def _query(url: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


class TestSplitBucketURL:
    """Tests for split_bucket_url."""

    def test_split(self):
        assert split_bucket_url(URL) == (
            "https://s3.amazonaws.com",
            "private-bucket",
            "abc123/metadata.json",
        )

    @pytest.mark.parametrize(
        "url",
        [
            "https://s3.amazonaws.com",
            "https://s3.amazonaws.com/",
            "https://s3.amazonaws.com/bucket",
            "https://s3.amazonaws.com/bucket/",
            "not a url",
        ],
    )
    def test_rejects_urls_without_resource(self, url):
        with pytest.raises(SigningError):
            split_bucket_url(url)


class TestSignURL:
    """Tests for sign_url."""

    def test_without_credentials_returns_url_unchanged(self):
        assert sign_url(URL, None, NOW) == URL

    def test_deterministic(self, credentials):
        """Test that identical inputs give identical output."""
        assert sign_url(URL, credentials, NOW) == sign_url(URL, credentials, NOW)

    def test_query_parameters(self, credentials):
        """Test that access key, expiry and signature are appended."""
        signed = sign_url(URL, credentials, NOW)
        query = _query(signed)

        assert signed.startswith(URL + "?")
        assert query["AWSAccessKeyId"] == "AKIAEXAMPLE"
        assert query["Expires"] == str(NOW + SIGNED_URL_TTL)
        assert "Signature" in query

    def test_signature_matches_canonical_string(self, credentials):
        """Test the signature against an HMAC-SHA1 of the canonical string."""
        expires = NOW + 3600
        canonical = f"GET\n\n\n{expires}\n/private-bucket/abc123/metadata.json"
        expected = base64.b64encode(
            hmac.new(b"s3-secret", canonical.encode(), hashlib.sha1).digest()
        ).decode()

        signed = sign_url(URL, credentials, NOW)
        raw_signature = signed.rsplit("Signature=", 1)[1]

        assert unquote(raw_signature) == expected
        assert "+" not in raw_signature
        assert "/" not in raw_signature
        assert "=" not in raw_signature

    def test_time_changes_only_expiry_and_signature(self, credentials):
        """Test that a different time only changes Expires and Signature."""
        first = sign_url(URL, credentials, NOW)
        second = sign_url(URL, credentials, NOW + 60)

        assert first.split("?")[0] == second.split("?")[0]
        q1, q2 = _query(first), _query(second)
        assert q1["AWSAccessKeyId"] == q2["AWSAccessKeyId"]
        assert q1["Expires"] != q2["Expires"]
        assert q1["Signature"] != q2["Signature"]

    def test_fractional_time_is_truncated(self, credentials):
        assert sign_url(URL, credentials, NOW + 0.9) == sign_url(URL, credentials, NOW)

    def test_existing_query_string(self, credentials):
        signed = sign_url(URL + "?versionId=3", credentials, NOW)
        assert "?versionId=3&AWSAccessKeyId=" in signed

    def test_unparseable_url_raises(self, credentials):
        with pytest.raises(SigningError):
            sign_url("https://s3.amazonaws.com/bucket", credentials, NOW)
