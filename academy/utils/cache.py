"""JSON cache with optional Redis backing and an in-process fallback."""

from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any

import redis
from loguru import logger

from academy.config import settings


def _json_default(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "hex") and callable(getattr(value, "hex")):
        return value.hex()
    return str(value)


def build_cache_key(**components: Any) -> str:
    """Return a stable hash for the provided keyword components."""

    payload = json.dumps(components, sort_keys=True, default=_json_default)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class CacheBackend:
    """Namespaced JSON cache.

    When a Redis URL is configured Redis is the only store, so an
    invalidation from any worker is seen by all of them. Without Redis, or
    after the first Redis failure disables it for the rest of the process,
    values live in a local dictionary.
    """

    def __init__(self, redis_url: str | None = None) -> None:
        self._lock = threading.Lock()
        self._local: dict[str, tuple[float | None, str]] = {}
        self._redis: redis.Redis | None = None
        if redis_url:
            self._redis = redis.Redis.from_url(redis_url, decode_responses=True)

    def _disable_redis(self, exc: Exception) -> None:
        logger.warning("Redis cache unavailable, using local cache", error=str(exc))
        self._redis = None

    def get(self, namespace: str, key: str) -> Any | None:
        name = f"{namespace}:{key}"
        if self._redis is not None:
            try:
                value = self._redis.get(name)
            except redis.RedisError as exc:
                self._disable_redis(exc)
                return None
            return json.loads(value) if value is not None else None
        with self._lock:
            entry = self._local.get(name)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at is not None and expires_at < time.monotonic():
                del self._local[name]
                return None
            return json.loads(payload)

    def set(self, namespace: str, key: str, value: Any, ttl_seconds: int) -> None:
        name = f"{namespace}:{key}"
        payload = json.dumps(value, default=_json_default)
        if self._redis is not None:
            try:
                self._redis.set(name, payload, ex=ttl_seconds or None)
            except redis.RedisError as exc:
                self._disable_redis(exc)
            else:
                return
        with self._lock:
            expires_at = time.monotonic() + ttl_seconds if ttl_seconds else None
            self._local[name] = (expires_at, payload)

    def invalidate(self, namespace: str, *, key: str | None = None) -> None:
        """Drop one key, or every key of ``namespace`` when ``key`` is None."""

        pattern = f"{namespace}:{key}" if key is not None else f"{namespace}:"
        if self._redis is not None:
            try:
                if key is not None:
                    self._redis.delete(pattern)
                else:
                    for name in self._redis.scan_iter(f"{pattern}*"):
                        self._redis.delete(name)
            except redis.RedisError as exc:
                self._disable_redis(exc)
        with self._lock:
            if key is not None:
                self._local.pop(pattern, None)
            else:
                for name in [n for n in self._local if n.startswith(pattern)]:
                    del self._local[name]

    def clear(self) -> None:
        """Reset the local cache (test helper)."""

        with self._lock:
            self._local.clear()


cache_backend = CacheBackend(str(settings.REDIS_URL) if settings.REDIS_URL else None)


__all__ = ["cache_backend", "CacheBackend", "build_cache_key"]
