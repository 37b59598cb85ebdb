"""Metadata polling with linear backoff.

Once a job has been accepted, the API writes a metadata document to a
storage location that does not exist until processing finishes. The poller
requests that location until it appears, the document reports an error, or
the retry budget runs out.

Waiting goes through an injectable ``sleep`` coroutine function and time is
read from injectable clocks, so the whole schedule can be driven by a
virtual clock in tests.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from filepreviews.core.exceptions import (
    ContentError,
    PollExhausted,
    PreviewCancelledError,
    TransportError,
)
from filepreviews.core.signing import sign_url
from filepreviews.types.common import PollState, PollStatus
from filepreviews.utils.logging import DebugLogger, mask_signed_url

if TYPE_CHECKING:
    import httpx

    from filepreviews.core.transport import HttpTransport
    from filepreviews.types.common import Credentials, Metadata, SigningCredentials

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]
T = TypeVar("T")


@dataclass(frozen=True)
class BackoffPolicy:
    """Retry schedule for metadata polling.

    The delay grows linearly with the attempt number: after attempt ``n``
    fails, the next wait is the previous wait plus ``n * step``, capped at
    ``max_delay``. With the defaults the waits are 2, 4, 7, 11, 16... seconds.

    Attributes:
        initial_delay: Delay before growth is applied, in seconds
        step: Growth per attempt number, in seconds
        max_delay: Upper bound for a single wait, in seconds
        max_attempts: Number of requests made before giving up
    """

    initial_delay: float = 1.0
    step: float = 1.0
    max_delay: float = 60.0
    max_attempts: int = 15

    def next_delay(self, delay: float, attempt: int) -> float:
        """Return the wait that follows failed attempt number ``attempt``."""
        return min(delay + attempt * self.step, self.max_delay)

    def schedule(self) -> list[float]:
        """Return every wait a poll that never succeeds would make."""
        delays = []
        delay = self.initial_delay
        for attempt in range(1, self.max_attempts):
            delay = self.next_delay(delay, attempt)
            delays.append(delay)
        return delays


class CancellationToken:
    """Cancels a pending poll, whether it is waiting or has a request in flight.

    Example:
        token = CancellationToken()
        task = asyncio.create_task(client.generate(url, cancel_token=token))
        ...
        token.cancel()  # task raises PreviewCancelledError
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event.wait()


class MetadataPoller:
    """Polls a metadata location until the document is available.

    Not-ready responses (any status other than 200) and transport failures
    are both retried under the same budget. When the budget runs out after a
    transport failure, the failure is attached to the PollExhausted error as
    ``last_error`` and chained as its cause.

    A poller holds no per-poll state; every call to ``poll`` creates its own
    PollState, so one poller can serve concurrent polls.

    Args:
        transport: HTTP transport
        credentials: API credentials, sent as basic auth on unsigned requests
        signing_credentials: Storage credentials; when set every request URL is signed
        policy: Retry schedule
        sleep: Coroutine function used to wait between attempts
        clock: Monotonic clock used to measure elapsed time
        wall_clock: Epoch clock used for signature expiry
        debug: Emit diagnostic logging
    """

    def __init__(
        self,
        transport: HttpTransport,
        credentials: Credentials | None = None,
        signing_credentials: SigningCredentials | None = None,
        policy: BackoffPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
        clock: Clock = time.monotonic,
        wall_clock: Clock = time.time,
        debug: bool = False,
    ) -> None:
        self.transport = transport
        self.credentials = credentials
        self.signing_credentials = signing_credentials
        self.policy = policy or BackoffPolicy()
        self._sleep = sleep
        self._clock = clock
        self._wall_clock = wall_clock
        self._log = DebugLogger(logger, debug)

    async def poll(
        self,
        metadata_url: str,
        cancel_token: CancellationToken | None = None,
    ) -> Metadata:
        """Wait for the metadata document at ``metadata_url``.

        Args:
            metadata_url: Location returned by job submission
            cancel_token: Token that aborts the poll, including a request in flight

        Returns:
            The metadata document

        Raises:
            ContentError: If the document reports an error or is not valid JSON
            PollExhausted: If the document did not appear within the budget
            PreviewCancelledError: If the token was cancelled
            SigningError: If the URL cannot be signed
        """
        state = PollState(
            target_url=metadata_url,
            delay=self.policy.initial_delay,
            started_at=self._clock(),
        )
        last_error: TransportError | None = None

        while True:
            self._raise_if_cancelled(state, cancel_token)

            state.status = PollStatus.REQUESTING
            self._log.debug("Polling for metadata, attempt %d: %s", state.attempts, metadata_url)

            try:
                response = await self._until_cancelled(self._fetch(state), state, cancel_token)
            except TransportError as e:
                self._log.debug("Metadata request failed: %s", e)
                last_error = e
            else:
                if response.status_code == 200:
                    return self._parse_metadata(state, response)
                self._log.debug("Metadata not ready (status %d)", response.status_code)
                last_error = None

            state.delay = self.policy.next_delay(state.delay, state.attempts)
            state.attempts += 1

            if state.attempts > self.policy.max_attempts:
                attempts = state.attempts - 1
                elapsed = self._clock() - state.started_at
                state.status = (
                    PollStatus.TRANSPORT_ERROR if last_error is not None else PollStatus.EXHAUSTED
                )
                self._log.debug("Giving up on %s after %d attempts", metadata_url, attempts)
                raise PollExhausted(attempts, elapsed, last_error, state.status) from last_error

            state.status = PollStatus.WAITING
            self._log.debug("Metadata not found, next try in %.1fs", state.delay)
            await self._wait(state, cancel_token)

    async def _fetch(self, state: PollState) -> httpx.Response:
        """Request the (possibly signed) metadata location once."""
        url = sign_url(state.target_url, self.signing_credentials, self._wall_clock())
        if self.signing_credentials is not None:
            self._log.debug("Signed metadata URL: %s", mask_signed_url(url))
            return await self.transport.send("GET", url)
        return await self.transport.send("GET", url, auth=self.credentials)

    def _parse_metadata(self, state: PollState, response: httpx.Response) -> Metadata:
        """Turn a 200 response into metadata or a content error."""
        try:
            body = response.json()
        except ValueError as e:
            state.status = PollStatus.CONTENT_ERROR
            raise ContentError(
                "metadata document is not valid JSON", state.target_url, state.status
            ) from e

        if isinstance(body, dict) and body.get("error"):
            state.status = PollStatus.CONTENT_ERROR
            self._log.debug("Metadata reports an error: %s", body["error"])
            raise ContentError(body["error"], state.target_url, state.status)

        state.status = PollStatus.SUCCESS
        self._log.debug("Metadata found after %d attempts", state.attempts)
        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug("Metadata:\n%s", json.dumps(body, indent=2, ensure_ascii=False))
        return body

    async def _wait(self, state: PollState, cancel_token: CancellationToken | None) -> None:
        """Sleep for the current delay, returning early if cancelled."""
        await self._until_cancelled(self._sleep(state.delay), state, cancel_token)

    async def _until_cancelled(
        self,
        aw: Awaitable[T],
        state: PollState,
        cancel_token: CancellationToken | None,
    ) -> T:
        """Await ``aw`` unless the token fires first, in which case it is abandoned."""
        if cancel_token is None:
            return await aw

        work_task = asyncio.ensure_future(aw)
        cancel_task = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({work_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (work_task, cancel_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(work_task, cancel_task, return_exceptions=True)

        self._raise_if_cancelled(state, cancel_token)
        return work_task.result()

    def _raise_if_cancelled(self, state: PollState, cancel_token: CancellationToken | None) -> None:
        if cancel_token is not None and cancel_token.cancelled:
            state.status = PollStatus.CANCELLED
            self._log.debug("Polling for %s cancelled", state.target_url)
            raise PreviewCancelledError(state.target_url, state.attempts - 1, state.status)
