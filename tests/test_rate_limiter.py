import asyncio
from types import SimpleNamespace

from rate_limiter import RateLimiter, ip_only_key


def test_blocks_after_max_requests():
    limiter = RateLimiter(window_seconds=60)

    async def scenario():
        results = [await limiter.hit("1.2.3.4", 3, now=100.0 + i) for i in range(4)]
        return results, await limiter.hit("5.6.7.8", 3, now=104.0)

    results, other = asyncio.run(scenario())
    assert results[:3] == [0, 0, 0]
    assert results[3] == 57
    assert other == 0


def test_window_expires():
    limiter = RateLimiter(window_seconds=60)

    async def scenario():
        await limiter.hit("a", 1, now=0.0)
        blocked = await limiter.hit("a", 1, now=30.0)
        allowed = await limiter.hit("a", 1, now=61.0)
        return blocked, allowed

    blocked, allowed = asyncio.run(scenario())
    assert blocked == 30
    assert allowed == 0


def test_cleanup_drops_idle_keys():
    limiter = RateLimiter(window_seconds=60)

    async def scenario():
        await limiter.hit("old", 5, now=0.0)
        await limiter.hit("new", 5, now=100.0)
        await limiter.cleanup(now=120.0)

    asyncio.run(scenario())
    assert limiter.tracked_keys() == ["new"]


def test_default_key_is_client_ip():
    request = SimpleNamespace(client=SimpleNamespace(host="1.2.3.4"))
    assert ip_only_key(request) == "1.2.3.4"
    assert ip_only_key(SimpleNamespace(client=None)) == "unknown"
    assert RateLimiter().key_func is ip_only_key
