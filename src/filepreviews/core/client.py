"""FilePreviewsClient - Main entry point for the filepreviews library."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from filepreviews.core.exceptions import (
    FilePreviewsError,
    PreviewCancelledError,
    RemoteRejection,
    ThrottlingError,
)
from filepreviews.core.polling import BackoffPolicy, MetadataPoller
from filepreviews.core.request import build_payload
from filepreviews.core.transport import HttpTransport
from filepreviews.types.common import (
    PollStatus,
    PreviewJob,
    PreviewOptions,
    PreviewRequest,
    PreviewResult,
)
from filepreviews.utils.logging import DebugLogger

if TYPE_CHECKING:
    import httpx

    from filepreviews.core.config import ClientConfig
    from filepreviews.core.polling import CancellationToken, Clock, SleepFunc
    from filepreviews.types.common import Metadata

logger = logging.getLogger(__name__)


class FilePreviewsClient:
    """Asynchronous client for the FilePreviews API.

    Submits preview jobs and waits for their metadata. Configuration is bound
    to the instance and never changes after construction, so one client can
    be shared by any number of concurrent calls.

    Example:
        from filepreviews import ClientConfig, FilePreviewsClient, PreviewOptions, Size

        config = ClientConfig(api_key="your_api_key", api_secret="your_api_secret")

        async with FilePreviewsClient(config) as client:
            result = await client.generate(
                "http://example.com/file.pdf",
                PreviewOptions(size=Size(width=250), metadata=["exif"]),
            )
            print(result.preview_url, result.metadata)

            # Check on a job without waiting for it
            job = await client.retrieve("job-id")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: HttpTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
        clock: Clock = time.monotonic,
        wall_clock: Clock = time.time,
    ) -> None:
        """Initialize the FilePreviewsClient.

        Args:
            config: Client configuration
            transport: HTTP transport (built from the config if None)
            sleep: Coroutine function used to wait between polls
            clock: Monotonic clock used to measure polling time
            wall_clock: Epoch clock used for URL signing

        Raises:
            ConfigurationError: If api_key or api_secret is missing
        """
        config.validate()

        self.config = config
        self._api_url = config.api_url.rstrip("/")
        self._transport = transport or HttpTransport(
            timeout=config.timeout,
            user_agent=config.resolved_user_agent,
            debug=config.debug,
        )
        self._poller = MetadataPoller(
            self._transport,
            credentials=config.credentials,
            signing_credentials=config.signing_credentials,
            policy=BackoffPolicy(
                initial_delay=config.initial_delay,
                step=config.delay_step,
                max_delay=config.max_delay,
                max_attempts=config.max_attempts,
            ),
            sleep=sleep,
            clock=clock,
            wall_clock=wall_clock,
            debug=config.debug,
        )
        self._log = DebugLogger(logger, config.debug)

    async def __aenter__(self) -> FilePreviewsClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def api_secret(self) -> str:
        return self.config.api_secret

    @property
    def poller(self) -> MetadataPoller:
        return self._poller

    async def generate(
        self,
        url: str,
        options: PreviewOptions | dict[str, Any] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> PreviewResult:
        """Generate a preview and wait for its metadata.

        Args:
            url: URL of the source file
            options: Job options, as PreviewOptions or a plain mapping
            cancel_token: Token that aborts the job before submission or while polling

        Returns:
            PreviewResult with the metadata and the preview URL

        Raises:
            RemoteRejection: If the API rejected the job (ThrottlingError on 429)
            TransportError: If the API could not be reached
            ContentError: If preview generation failed
            PollExhausted: If the metadata did not appear in time
            PreviewCancelledError: If cancel_token was cancelled
        """
        if cancel_token is not None and cancel_token.cancelled:
            raise PreviewCancelledError(url, 0, PollStatus.CANCELLED)

        job = await self.submit(url, options)

        if not job.metadata_url:
            raise FilePreviewsError(f"Job {job.id} was accepted without a metadata URL")

        metadata = await self.poll(job.metadata_url, cancel_token)
        self._log.debug("Processing done for %s", url)

        return PreviewResult(
            metadata=metadata,
            metadata_url=job.metadata_url,
            preview_url=job.preview_url,
        )

    async def submit(
        self,
        url: str,
        options: PreviewOptions | dict[str, Any] | None = None,
    ) -> PreviewJob:
        """Submit a preview job without waiting for it.

        Args:
            url: URL of the source file
            options: Job options, as PreviewOptions or a plain mapping

        Returns:
            Handle for the accepted job

        Raises:
            RemoteRejection: If the API rejected the job (ThrottlingError on 429)
            TransportError: If the API could not be reached
        """
        if isinstance(options, dict):
            options = PreviewOptions.from_dict(options)

        payload = build_payload(PreviewRequest(url=url, options=options))
        self._log.debug("Submitting preview job: %s", payload)

        response = await self._transport.send(
            "POST",
            f"{self._api_url}/previews/",
            auth=self.config.credentials,
            json=payload,
        )
        data = self._handle_response(response)

        job = PreviewJob.from_response(data if isinstance(data, dict) else {})
        self._log.debug("Job %s accepted, metadata at %s", job.id, job.metadata_url)
        return job

    async def poll(
        self,
        metadata_url: str,
        cancel_token: CancellationToken | None = None,
    ) -> Metadata:
        """Wait for the metadata document of a submitted job.

        Args:
            metadata_url: Metadata location returned by submit()
            cancel_token: Token that aborts waiting

        Returns:
            The metadata document
        """
        return await self._poller.poll(metadata_url, cancel_token)

    async def retrieve(self, job_id: str) -> Any:
        """Get the current state of a job.

        Makes a single request; the job may still be pending.

        Args:
            job_id: Job ID assigned by the API

        Returns:
            The job resource as reported by the API

        Raises:
            RemoteRejection: If the API rejected the request (ThrottlingError on 429)
            TransportError: If the API could not be reached
        """
        # The id is a single path segment; "/" and ".." must not escape it.
        job_path = quote(str(job_id), safe="")
        response = await self._transport.send(
            "GET",
            f"{self._api_url}/previews/{job_path}/",
            auth=self.config.credentials,
        )
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Return the parsed body of a 2xx response or raise for its status."""
        body = self._parse_body(response)

        if 200 <= response.status_code < 300:
            if self._log.isEnabledFor(logging.DEBUG):
                self._log.debug("API response:\n%s", json.dumps(body, indent=2, ensure_ascii=False))
            return body

        if response.status_code == 429:
            retry_after = None
            with contextlib.suppress(TypeError, ValueError):
                retry_after = int(response.headers.get("Retry-After"))
            self._log.debug("API request throttled")
            raise ThrottlingError(body, retry_after)

        self._log.debug("API request error %d: %s", response.status_code, body)
        raise RemoteRejection(response.status_code, body)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def close(self) -> None:
        """Close the HTTP transport."""
        await self._transport.close()
