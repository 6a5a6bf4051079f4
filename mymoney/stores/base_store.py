"""
Observable State Store.

A store holds one immutable snapshot and pushes every replacement to its
subscribers.  Subscribing delivers the current snapshot immediately, so a
late subscriber never has to poll.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel

from mymoney.logger import StructuredLogger

StateT = TypeVar("StateT", bound=BaseModel)


class BaseStore(Generic[StateT]):
    """Snapshot holder with ordered, failure-isolated notification."""

    def __init__(self, initial: StateT, logger: StructuredLogger) -> None:
        self._state: StateT = initial
        self._logger: StructuredLogger = logger
        self._subscribers: dict[int, Callable[[StateT], None]] = {}
        self._ids = itertools.count()

    @property
    def state(self) -> StateT:
        """The current snapshot."""
        return self._state

    def subscribe(self, callback: Callable[[StateT], None]) -> Callable[[], None]:
        """Register *callback* and return a function that removes it."""
        token = next(self._ids)
        self._subscribers[token] = callback
        self._deliver(callback, self._state)

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def dispose(self) -> None:
        """Drop every subscriber."""
        self._subscribers.clear()

    def _set(self, state: StateT) -> None:
        self._state = state
        for callback in list(self._subscribers.values()):
            self._deliver(callback, state)

    def _deliver(self, callback: Callable[[StateT], None], state: StateT) -> None:
        try:
            callback(state)
        except Exception:
            self._logger.error(
                "%s subscriber raised; continuing delivery.",
                type(self).__name__,
                exc_info=True,
            )
