#!/usr/bin/env python3
"""Example: Cancel a Pending Preview

This example gives up on a preview that takes longer than a deadline,
without waiting out the whole retry schedule.

To run:
    export FILEPREVIEWS_API_KEY="your_api_key"
    export FILEPREVIEWS_API_SECRET="your_api_secret"
    python main.py http://example.com/big-file.psd
"""

from __future__ import annotations

import asyncio
import sys

from filepreviews import (
    CancellationToken,
    ClientConfig,
    FilePreviewsClient,
    PreviewCancelledError,
)

DEADLINE = 20


async def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://example.com/big-file.psd"

    config = ClientConfig.from_env()
    if not config.api_key or not config.api_secret:
        print("Please set FILEPREVIEWS_API_KEY and FILEPREVIEWS_API_SECRET environment variables")
        sys.exit(1)

    token = CancellationToken()

    async with FilePreviewsClient(config) as client:
        task = asyncio.create_task(client.generate(url, cancel_token=token))
        loop = asyncio.get_running_loop()
        loop.call_later(DEADLINE, token.cancel)

        try:
            result = await task
            print(f"Preview ready: {result.preview_url}")
        except PreviewCancelledError as e:
            print(f"Gave up after {DEADLINE}s ({e.attempts} attempts)")


if __name__ == "__main__":
    asyncio.run(main())
