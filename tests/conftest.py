"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def eth_address() -> bytes:
    """Sample 20-byte settlement chain address."""
    return bytes.fromhex("52908400098527886e0f7030069857d2e4169ee7")


@pytest.fixture
def one_eth() -> int:
    """1 ETH in wei."""
    return 10**18
