"""
Keyed Lock

In-process mutual exclusion keyed by string (seat id, user id, ...) for a single worker;
RedisKeyedLock is the variant shared by several workers. Several keys are always taken
in sorted order so two holders with overlapping key sets cannot deadlock.
Acquisition is bounded; on timeout the partially taken keys are released and BusyError
is raised.
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

import anyio

from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.platform.state.i_keyed_lock import IKeyedLock


class _Entry:
    __slots__ = ('lock', 'refs')

    def __init__(self) -> None:
        self.lock = anyio.Lock()
        self.refs = 0


class KeyedLock(IKeyedLock):
    def __init__(self, *, timeout: float) -> None:
        self._timeout = timeout
        self._entries: dict[str, _Entry] = {}

    @property
    def timeout(self) -> float:
        return self._timeout

    def held_keys(self) -> set[str]:
        return {key for key, entry in self._entries.items() if entry.lock.locked()}

    def _checkout(self, key: str) -> _Entry:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        entry.refs += 1
        return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        entry.refs -= 1
        if entry.refs == 0:
            self._entries.pop(key, None)

    @asynccontextmanager
    async def hold(self, keys: Iterable[str]) -> AsyncIterator[list[str]]:
        ordered = sorted(set(keys))
        entries = [(key, self._checkout(key)) for key in ordered]
        acquired: list[tuple[str, _Entry]] = []
        try:
            try:
                with anyio.fail_after(self._timeout):
                    for key, entry in entries:
                        await entry.lock.acquire()
                        acquired.append((key, entry))
            except TimeoutError:
                busy = [key for key, _ in entries[len(acquired) :]]
                Logger.base.warning(
                    f'⏳ [LOCK] Timed out after {self._timeout}s waiting for {busy}'
                )
                raise BusyError(
                    'Seats are being booked by another request, please retry',
                    retry_after=max(1, round(self._timeout)),
                )
            Logger.base.debug(f'🔒 [LOCK] Acquired {ordered}')
            yield ordered
        finally:
            for _, entry in reversed(acquired):
                entry.lock.release()
            for key, entry in entries:
                self._checkin(key, entry)
            if acquired:
                Logger.base.debug(f'🔓 [LOCK] Released {ordered}')
