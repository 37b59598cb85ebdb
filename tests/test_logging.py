"""Tests for debug-gated logging."""

import logging

import httpx
import respx

from filepreviews import ClientConfig, FilePreviewsClient
from filepreviews.utils.logging import DebugLogger, mask_signed_url


def _own_records(caplog):
    return [r for r in caplog.records if r.name.startswith("filepreviews")]


class TestMaskSignedURL:
    """Tests for mask_signed_url."""

    def test_masks_key_and_signature(self):
        url = "https://s3.amazonaws.com/b/k?AWSAccessKeyId=AKIA&Expires=1400003600&Signature=abc%2B"
        assert mask_signed_url(url) == (
            "https://s3.amazonaws.com/b/k?AWSAccessKeyId=***&Expires=1400003600&Signature=***"
        )

    def test_leaves_plain_urls_alone(self):
        url = "https://s3.amazonaws.com/b/k"
        assert mask_signed_url(url) == url


class TestDebugLogger:
    """Tests for DebugLogger."""

    def test_disabled_emits_nothing(self, caplog):
        log = DebugLogger(logging.getLogger("filepreviews.test"), enabled=False)
        with caplog.at_level(logging.DEBUG, logger="filepreviews"):
            log.debug("hello %s", "world")
        assert caplog.records == []

    def test_enabled_emits(self, caplog):
        log = DebugLogger(logging.getLogger("filepreviews.test"), enabled=True)
        with caplog.at_level(logging.DEBUG, logger="filepreviews"):
            log.debug("hello %s", "world")
        assert [r.getMessage() for r in caplog.records] == ["hello world"]

    @respx.mock
    async def test_client_debug_flag(self, caplog):
        """Test that only a debug client logs its requests."""
        respx.get("https://api.filepreviews.io/v2/previews/abc/").mock(
            return_value=httpx.Response(200, json={"status": "success"})
        )

        with caplog.at_level(logging.DEBUG, logger="filepreviews"):
            async with FilePreviewsClient(ClientConfig(api_key="k", api_secret="s")) as quiet:
                await quiet.retrieve("abc")
            assert _own_records(caplog) == []

            config = ClientConfig(api_key="k", api_secret="s", debug=True)
            async with FilePreviewsClient(config) as loud:
                await loud.retrieve("abc")
            assert any("previews/abc/" in r.getMessage() for r in _own_records(caplog))
