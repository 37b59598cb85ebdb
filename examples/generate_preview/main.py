#!/usr/bin/env python3
"""Example: Generate a Preview

This example submits a document to FilePreviews and waits for its preview
and metadata.

To run:
    export FILEPREVIEWS_API_KEY="your_api_key"
    export FILEPREVIEWS_API_SECRET="your_api_secret"
    python main.py http://example.com/file.pdf
"""

from __future__ import annotations

import asyncio
import sys

from filepreviews import (
    ClientConfig,
    FilePreviewsClient,
    FilePreviewsError,
    PreviewOptions,
    Size,
    ThrottlingError,
    configure_logging,
)


async def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://example.com/file.pdf"

    # Credentials (and optional S3 keys for private buckets) from the environment
    config = ClientConfig.from_env(debug=True)
    if not config.api_key or not config.api_secret:
        print("Please set FILEPREVIEWS_API_KEY and FILEPREVIEWS_API_SECRET environment variables")
        sys.exit(1)

    configure_logging(debug=config.debug)

    options = PreviewOptions(
        size=Size(width=250, height=250),
        metadata=["exif", "ocr"],
        format="jpg",
    )

    async with FilePreviewsClient(config) as client:
        try:
            result = await client.generate(url, options)
        except ThrottlingError as e:
            print(f"Throttled, retry after {e.retry_after or 'a while'}s")
            sys.exit(1)
        except FilePreviewsError as e:
            print(f"Preview failed: {e}")
            sys.exit(1)

        print(f"Preview:  {result.preview_url}")
        print(f"Metadata: {result.metadata_url}")
        for key, value in result.metadata.items():
            print(f"  {key}: {value}")


if __name__ == "__main__":
    asyncio.run(main())
