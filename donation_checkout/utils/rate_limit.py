"""
Simple in-memory rate limiter for the checkout route.

Limit comes from RATE_LIMIT_CHECKOUT_PER_MINUTE (0 disables it). Counts are
per process, so behind several workers the effective limit is multiplied.
"""

from __future__ import annotations
import time
from collections import defaultdict
from functools import wraps
from threading import Lock

from flask import current_app, jsonify, request

_lock = Lock()
_counts: dict[str, list[float]] = defaultdict(list)
_window = 60  # seconds


def _clean_old(ts_list: list[float], window: int) -> None:
    cutoff = time.time() - window
    while ts_list and ts_list[0] < cutoff:
        ts_list.pop(0)


def _evict_expired(window: int) -> None:
    """Drop timestamps outside the window and forget keys with none left."""
    for key in list(_counts):
        _clean_old(_counts[key], window)
        if not _counts[key]:
            del _counts[key]


def is_rate_limited(key: str, limit: int, window_seconds: int = _window) -> bool:
    """Return True if the key has exceeded the limit within the window."""
    if limit <= 0:
        return False
    with _lock:
        _evict_expired(window_seconds)
        hits = _counts[key]
        if len(hits) >= limit:
            return True
        hits.append(time.time())
        return False


def tracked_keys() -> int:
    with _lock:
        return len(_counts)


def reset() -> None:
    with _lock:
        _counts.clear()


def rate_limit_key() -> str:
    """Client IP, honouring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def checkout_rate_limit(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        limit = current_app.config["CHECKOUT_SETTINGS"].rate_limit_per_minute
        if limit > 0 and is_rate_limited(f"checkout:{rate_limit_key()}", limit):
            return jsonify({"error": "rate limit exceeded", "retry_after": _window}), 429
        return fn(*args, **kwargs)

    return wrapper
