"""
tests.test_refresh_store

In-memory refresh-token store contract and thread safety.
"""

from __future__ import annotations

import asyncio
import threading
from datetime import UTC, datetime, timedelta

import pytest

from authcore.auth.store import InMemoryRefreshTokenStore

T0 = datetime(2026, 1, 5, tzinfo=UTC)


@pytest.mark.asyncio
async def test_store_get_revoke() -> None:
    store = InMemoryRefreshTokenStore()
    await store.store("tok", "alice", T0)

    record = await store.get("tok")
    assert record is not None
    assert (record.username, record.expires_at_utc) == ("alice", T0)

    assert await store.revoke("tok") is True
    assert await store.revoke("tok") is False
    assert await store.get("tok") is None


@pytest.mark.asyncio
async def test_store_overwrites_existing_token() -> None:
    store = InMemoryRefreshTokenStore()
    await store.store("tok", "alice", T0)
    await store.store("tok", "bob", T0 + timedelta(days=1))

    record = await store.get("tok")
    assert record is not None
    assert record.username == "bob"
    assert len(store) == 1


@pytest.mark.asyncio
async def test_get_does_not_evict_expired_entries() -> None:
    store = InMemoryRefreshTokenStore()
    await store.store("tok", "alice", T0 - timedelta(days=30))

    assert await store.get("tok") is not None
    assert await store.get("tok") is not None


@pytest.mark.asyncio
async def test_purge_expired_uses_inclusive_boundary() -> None:
    store = InMemoryRefreshTokenStore()
    await store.store("dead", "alice", T0)
    await store.store("live", "alice", T0 + timedelta(microseconds=1))

    assert await store.purge_expired(T0) == 1
    assert await store.get("dead") is None
    assert await store.get("live") is not None


def test_concurrent_revoke_from_threads_has_single_winner() -> None:
    store = InMemoryRefreshTokenStore()
    asyncio.run(store.store("tok", "alice", T0))

    barrier = threading.Barrier(8)
    results: list[bool] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        removed = asyncio.run(store.revoke("tok"))
        with results_lock:
            results.append(removed)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert sorted(results) == [False] * 7 + [True]


def test_concurrent_writers_and_readers_keep_table_consistent() -> None:
    store = InMemoryRefreshTokenStore()

    def writer(prefix: str) -> None:
        async def run() -> None:
            for i in range(200):
                await store.store(f"{prefix}-{i}", prefix, T0)
                assert await store.get(f"{prefix}-{i}") is not None
                if i % 2:
                    await store.revoke(f"{prefix}-{i}")

        asyncio.run(run())

    threads = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(store) == 4 * 100
