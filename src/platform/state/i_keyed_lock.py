"""Keyed Lock Interface"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager


class IKeyedLock(ABC):
    """
    Mutual exclusion keyed by string

    hold(keys) takes every key in sorted order and yields the sorted list; it raises
    BusyError when the keys cannot be taken within the configured timeout.
    """

    @abstractmethod
    def hold(self, keys: Iterable[str]) -> AbstractAsyncContextManager[list[str]]:
        pass
