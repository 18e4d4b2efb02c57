"""
Redis Keyed Lock

Cross-process variant of KeyedLock: every worker pointed at the same Redis shares the
seat guard. Each key is a Redis string taken with SET NX PX and owned by a random token;
release deletes the key only while it still holds that token, so a lock that expired and
was taken over is never released by its previous owner.

Keys are taken in sorted order. A busy key is polled until the timeout, then the keys
already taken are released and BusyError is raised. The PX expiry bounds how long a
crashed worker can keep a seat guarded.
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from uuid import uuid4

import anyio

from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.platform.state.i_keyed_lock import IKeyedLock
from src.platform.state.redis_client import RedisClient


LOCK_KEY_PREFIX = 'seating:lock:'

# Delete only when the caller still owns the key
RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


def lock_key(key: str) -> str:
    return f'{LOCK_KEY_PREFIX}{key}'


class RedisKeyedLock(IKeyedLock):
    def __init__(
        self,
        *,
        redis_client: RedisClient,
        timeout: float,
        ttl_ms: int = 10_000,
        retry_interval: float = 0.05,
    ) -> None:
        self._redis_client = redis_client
        self._timeout = timeout
        self._ttl_ms = ttl_ms
        self._retry_interval = retry_interval

    @property
    def timeout(self) -> float:
        return self._timeout

    @asynccontextmanager
    async def hold(self, keys: Iterable[str]) -> AsyncIterator[list[str]]:
        ordered = sorted(set(keys))
        token = uuid4().hex
        client = self._redis_client.get_client()
        acquired: list[str] = []
        try:
            try:
                with anyio.fail_after(self._timeout):
                    for key in ordered:
                        while not await client.set(
                            lock_key(key), token, nx=True, px=self._ttl_ms
                        ):
                            await anyio.sleep(self._retry_interval)
                        acquired.append(key)
            except TimeoutError:
                busy = ordered[len(acquired) :]
                Logger.base.warning(
                    f'⏳ [LOCK] Timed out after {self._timeout}s waiting for {busy} in Redis'
                )
                raise BusyError(
                    'Seats are being booked by another request, please retry',
                    retry_after=max(1, round(self._timeout)),
                )
            Logger.base.debug(f'🔒 [LOCK] Acquired {ordered} in Redis (ttl={self._ttl_ms}ms)')
            yield ordered
        finally:
            with anyio.CancelScope(shield=True):
                for key in reversed(acquired):
                    released = await client.eval(  # type: ignore
                        RELEASE_SCRIPT, 1, lock_key(key), token
                    )
                    if not released:
                        Logger.base.warning(
                            f'⚠️ [LOCK] {key} expired before release (ttl={self._ttl_ms}ms)'
                        )
