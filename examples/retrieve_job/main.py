#!/usr/bin/env python3
"""Example: Retrieve a Job

This example submits a job without waiting, then checks on it with single
retrieve() calls until the API reports it finished.

To run:
    export FILEPREVIEWS_API_KEY="your_api_key"
    export FILEPREVIEWS_API_SECRET="your_api_secret"
    python main.py http://example.com/file.pdf
"""

from __future__ import annotations

import asyncio
import sys

from filepreviews import ClientConfig, FilePreviewsClient


async def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://example.com/file.pdf"

    config = ClientConfig.from_env()
    if not config.api_key or not config.api_secret:
        print("Please set FILEPREVIEWS_API_KEY and FILEPREVIEWS_API_SECRET environment variables")
        sys.exit(1)

    async with FilePreviewsClient(config) as client:
        job = await client.submit(url, {"sizes": ["300"], "metadata": ["checksum"]})
        print(f"Submitted job {job.id} ({job.status})")

        for _ in range(10):
            state = await client.retrieve(job.id)
            status = state.get("status") if isinstance(state, dict) else None
            print(f"  status: {status}")
            if status in ("success", "failure"):
                break
            await asyncio.sleep(5)


if __name__ == "__main__":
    asyncio.run(main())
