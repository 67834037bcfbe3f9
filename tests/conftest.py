"""
Shared pytest fixtures for Codekeeper tests.

This module provides common fixtures including:
- Redis mocks for code store tests
- An in-memory Redis double with explicit expiry for lifecycle tests
- Registry, code store and lifecycle instances wired to those doubles
"""

import os
import sys
from itertools import cycle
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from codekeeper.modules.codes import CodeStore
from codekeeper.modules.lifecycle import SessionLifecycle
from codekeeper.modules.session import SessionRegistry


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()

    redis.set = AsyncMock(return_value=True)
    redis.get = AsyncMock(return_value=None)
    redis.delete = AsyncMock(return_value=1)
    redis.exists = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)

    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    TTLs passed via ``ex`` are recorded in ``redis._ttls``. Nothing expires on
    its own; call ``redis.expire_now(key)`` to simulate a TTL elapsing.
    """
    storage = {}
    ttls = {}

    redis = AsyncMock()

    async def mock_set(key, value, *args, ex=None, **kwargs):
        storage[key] = value
        if ex is not None:
            ttls[key] = ex
        else:
            ttls.pop(key, None)
        return True

    async def mock_get(key):
        return storage.get(key)

    async def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in storage:
                del storage[key]
                ttls.pop(key, None)
                count += 1
        return count

    async def mock_exists(*keys):
        return sum(1 for k in keys if k in storage)

    def expire_now(key):
        storage.pop(key, None)
        ttls.pop(key, None)

    redis.set = AsyncMock(side_effect=mock_set)
    redis.get = AsyncMock(side_effect=mock_get)
    redis.delete = AsyncMock(side_effect=mock_delete)
    redis.exists = AsyncMock(side_effect=mock_exists)
    redis.ping = AsyncMock(return_value=True)
    redis.expire_now = expire_now
    redis._storage = storage  # Expose for test assertions
    redis._ttls = ttls

    return redis


# =============================================================================
# Module Fixtures
# =============================================================================

@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def code_store(mock_redis_with_data):
    return CodeStore(mock_redis_with_data)


@pytest.fixture
def code_sequence():
    """Deterministic code generator cycling through distinct codes."""
    return cycle(["111111", "222222", "333333", "444444", "555555", "666666"]).__next__


@pytest.fixture
def lifecycle(registry, code_store, code_sequence):
    return SessionLifecycle(registry, code_store, code_generator=code_sequence)


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
