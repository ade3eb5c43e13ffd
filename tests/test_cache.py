"""Tests for the namespaced JSON cache."""
from __future__ import annotations

import fnmatch

import redis

from academy.utils.cache import CacheBackend


class FakeRedis:
    """Dict-backed stand-in shared by several backends, like one Redis server."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    def get(self, name):
        return self.store.get(name)

    def set(self, name, value, ex=None):
        self.store[name] = value

    def delete(self, name):
        self.store.pop(name, None)

    def scan_iter(self, pattern):
        return [name for name in list(self.store) if fnmatch.fnmatch(name, pattern)]


class BrokenRedis:
    def get(self, name):
        raise redis.ConnectionError("connection refused")

    def set(self, name, value, ex=None):
        raise redis.ConnectionError("connection refused")


def backend_on(server) -> CacheBackend:
    backend = CacheBackend()
    backend._redis = server
    return backend


def test_local_cache_round_trip_and_invalidation() -> None:
    backend = CacheBackend()
    backend.set("leaderboard", "10", [{"rank": 1}], ttl_seconds=60)
    backend.set("leaderboard", "20", [{"rank": 1}, {"rank": 2}], ttl_seconds=60)

    assert backend.get("leaderboard", "10") == [{"rank": 1}]

    backend.invalidate("leaderboard")
    assert backend.get("leaderboard", "10") is None
    assert backend.get("leaderboard", "20") is None


def test_invalidation_by_another_worker_is_seen_through_redis() -> None:
    server = FakeRedis()
    api_worker = backend_on(server)
    task_worker = backend_on(server)

    api_worker.set("profile", "user-1", {"xp": 100}, ttl_seconds=60)
    assert api_worker.get("profile", "user-1") == {"xp": 100}

    task_worker.invalidate("profile", key="user-1")

    assert api_worker.get("profile", "user-1") is None


def test_values_written_by_another_worker_are_read_from_redis() -> None:
    server = FakeRedis()
    first = backend_on(server)
    second = backend_on(server)

    first.set("badges", "catalog", ["Premier Pas"], ttl_seconds=60)
    second.set("badges", "catalog", ["Premier Pas", "Perfectionniste"], ttl_seconds=60)

    assert first.get("badges", "catalog") == ["Premier Pas", "Perfectionniste"]


def test_redis_failure_falls_back_to_local_cache() -> None:
    backend = backend_on(BrokenRedis())

    assert backend.get("leaderboard", "10") is None
    assert backend._redis is None

    backend.set("leaderboard", "10", [{"rank": 1}], ttl_seconds=60)
    assert backend.get("leaderboard", "10") == [{"rank": 1}]
