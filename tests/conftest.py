"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from filepreviews import ClientConfig


class VirtualClock:
    """Clock and sleep pair that advances time without waiting."""

    def __init__(self, start: float = 1_400_000_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> VirtualClock:
    """Create a virtual clock for polling tests."""
    return VirtualClock()


@pytest.fixture
def config() -> ClientConfig:
    """Create a configuration with API credentials only."""
    return ClientConfig(api_key="key", api_secret="secret")


@pytest.fixture
def signing_config() -> ClientConfig:
    """Create a configuration that signs metadata URLs."""
    return ClientConfig(
        api_key="key",
        api_secret="secret",
        s3_access_key="AKIAEXAMPLE",
        s3_secret_key="s3-secret",
    )
