"""
Tool Analyzer Backend — Usage Limiter

Per-caller request quota built on `limits` (the engine behind slowapi).
One UsageLimiter is created per app and injected into handlers; the backing
store is whatever async `limits` storage the URI names (async+memory:// by
default, async+redis://… in deployment), so quota calls never block the
event loop.
"""

from limits import parse_many
from limits.aio.strategies import FixedWindowRateLimiter
from limits.storage import storage_from_string

ASYNC_SCHEME_PREFIX = "async+"


def async_storage_uri(storage_uri: str) -> str:
    """Map a plain storage URI (memory://, redis://…) to its async variant."""
    if storage_uri.startswith(ASYNC_SCHEME_PREFIX):
        return storage_uri
    return f"{ASYNC_SCHEME_PREFIX}{storage_uri}"


class UsageLimiter:
    """
    Fixed-window quota over one or more windows, e.g. "10/hour;3/day".

    A key is allowed only while every window still has room. check() never
    consumes quota; record() counts one request against every window.
    """

    def __init__(self, limits: str, storage_uri: str = "async+memory://"):
        self._items = parse_many(limits)
        self._storage = storage_from_string(async_storage_uri(storage_uri))
        self._strategy = FixedWindowRateLimiter(self._storage)

    @property
    def limits(self) -> str:
        return ";".join(str(item) for item in self._items)

    async def check(self, key: str) -> bool:
        """Return True if one more request from `key` fits every window."""
        for item in self._items:
            if not await self._strategy.test(item, key):
                return False
        return True

    async def record(self, key: str) -> None:
        """Count one request from `key` against every window."""
        for item in self._items:
            await self._strategy.hit(item, key)

    async def remaining(self, key: str) -> int:
        """Requests `key` may still make before the tightest window is exhausted."""
        if not self._items:
            return 0
        stats = [await self._strategy.get_window_stats(item, key) for item in self._items]
        return min(stat.remaining for stat in stats)

    async def reset(self) -> None:
        await self._storage.reset()
