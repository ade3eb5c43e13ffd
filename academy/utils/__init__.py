"""Utility helpers for the application."""

from academy.utils.cache import build_cache_key, cache_backend

__all__ = ["build_cache_key", "cache_backend"]
