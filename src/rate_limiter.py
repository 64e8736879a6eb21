"""Simple rate limiter"""

import time
import asyncio
from functools import wraps
from fastapi import Request
from fastapi.responses import JSONResponse


def ip_only_key(request: Request):
    """Uses the client IP as the key for rate limiting."""
    return request.client.host if request.client else "unknown"


class RateLimiter:
    """In-memory sliding window of request timestamps per client key"""

    def __init__(self, window_seconds: int = 3600, key_func=ip_only_key):
        self.window_seconds = window_seconds
        self.key_func = key_func
        self._tracker = {}
        self._lock = asyncio.Lock()


    async def hit(self, key: str, max_requests: int, now: float = None) -> int:
        """
        Record a request for key.

        Returns 0 when the request is allowed, otherwise the number of seconds
        until the oldest tracked request leaves the window.
        """
        current_time = time.time() if now is None else now
        async with self._lock:
            timestamps = [
                t for t in self._tracker.get(key, []) if (current_time - t) < self.window_seconds
            ]
            if len(timestamps) >= max_requests:
                self._tracker[key] = timestamps
                oldest = min(timestamps)
                return max(1, int(self.window_seconds - (current_time - oldest)))

            timestamps.append(current_time)
            self._tracker[key] = timestamps
        return 0


    def limit(self, max_requests: int, error_message: str = "Rate limit exceeded. Try again later."):
        """
        Rate limit decorator for endpoints that take a Request argument.

        Args:
            max_requests: Max number of allowed requests per window.
            error_message: Message to return when rate limited.
        """

        def decorator(func):
            @wraps(func)
            async def wrapper(*args, **kwargs):
                request: Request = kwargs.get('request')
                if not request:
                    for arg in args:
                        if isinstance(arg, Request):
                            request = arg
                            break
                if not request:
                    raise RuntimeError("Request object not found for rate limiting.")

                retry_after = await self.hit(self.key_func(request), max_requests)
                if retry_after:
                    return JSONResponse(
                        status_code=429,
                        content={"detail": error_message},
                        headers={"Retry-After": str(retry_after)}
                    )

                return await func(*args, **kwargs)

            return wrapper
        return decorator


    async def cleanup(self, now: float = None):
        """Drop keys with no requests left in the window."""
        current_time = time.time() if now is None else now
        async with self._lock:
            keys_to_delete = []
            for key, timestamps in self._tracker.items():
                recent = [t for t in timestamps if (current_time - t) < self.window_seconds]
                if recent:
                    self._tracker[key] = recent
                else:
                    keys_to_delete.append(key)

            for key in keys_to_delete:
                del self._tracker[key]


    def tracked_keys(self):
        return list(self._tracker)


    async def cleanup_loop(self, interval_seconds: int = 600):
        """Background task to periodically clean up the request tracker."""
        try:
            while True:
                await asyncio.sleep(interval_seconds)
                await self.cleanup()
        except asyncio.CancelledError:
            pass  # Shutdown cleanly
