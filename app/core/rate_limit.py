"""
In-memory sliding-window rate limiter, used on the company login endpoint.
"""
import logging
import time
from typing import Dict, List

from fastapi import Request

from app.core.errors import TooManyRequests

logger = logging.getLogger(__name__)

# {"<scope>:<ip>": [timestamps]}
rate_limit_store: Dict[str, List[float]] = {}


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first hop of X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def _evict_stale(cutoff: float) -> None:
    """Drop clients whose newest request is older than the window."""
    for key in [key for key, timestamps in rate_limit_store.items() if not timestamps or timestamps[-1] <= cutoff]:
        del rate_limit_store[key]


def check_rate_limit(request: Request, max_requests: int = 10, window_seconds: int = 60) -> None:
    """
    Record a request and reject it once the client exceeds max_requests per window.

    Raises:
        TooManyRequests: limit exceeded for this client and path
    """
    key = f"{request.url.path}:{get_client_ip(request)}"
    now = time.time()
    cutoff = now - window_seconds

    _evict_stale(cutoff)
    recent = [timestamp for timestamp in rate_limit_store.get(key, []) if timestamp > cutoff]

    if len(recent) >= max_requests:
        rate_limit_store[key] = recent
        logger.warning(f"Rate limit exceeded: key={key}, requests={len(recent)}, window={window_seconds}s")
        raise TooManyRequests(
            f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    recent.append(now)
    rate_limit_store[key] = recent
