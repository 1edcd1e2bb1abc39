from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Subscription:
    """Handle returned by `subscribe`; `unsubscribe()` stops further callbacks."""

    def __init__(self, owner: list[Callable[..., None]], callback: Callable[..., None]) -> None:
        self._owner = owner
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        # Remove by identity: the same callback may be subscribed more than once.
        for idx, cb in enumerate(self._owner):
            if cb is self._callback:
                del self._owner[idx]
                break


class Observable(Generic[T]):
    """Synchronous single-value cell.

    Contract:
      - `current_value()` returns the held value.
      - `update(value)` replaces it and calls every subscriber in subscription order
        before returning.
      - `subscribe(callback)` replays the current value once, then follows updates.

    Subscribers must not raise. An exception escapes `update` and the remaining
    subscribers for that update are skipped.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    def current_value(self) -> T:
        return self._value

    def update(self, value: T) -> T:
        self._value = value
        self._publish()
        return value

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        # Wrap so that each subscription has its own identity in the list.
        def _listener(value: T) -> None:
            callback(value)

        self._subscribers.append(_listener)
        _listener(self._value)
        return Subscription(self._subscribers, _listener)

    def _publish(self) -> None:
        value = self._value
        for cb in list(self._subscribers):
            cb(value)


class Record(Observable[R]):
    """Container for a frozen dataclass record; `update` shallow-merges fields."""

    def update(self, value: R | None = None, **changes: Any) -> R:  # type: ignore[override]
        merged = value if value is not None else self._value
        if changes:
            merged = replace(merged, **changes)  # type: ignore[type-var]
        return super().update(merged)

    def apply(self, fn: Callable[[R], dict[str, Any]]) -> R:
        """Merge the partial computed from the current value.

        The read and the write happen inside one call, so no other callback can
        interleave between them.
        """

        return self.update(**fn(self._value))


def increment(cell: Observable[int], n: int = 1) -> int:
    return cell.update(cell.current_value() + n)


class Trigger:
    """Fire-and-forget signal with no held value (audio trigger points).

    Listener failures are logged and skipped so a broken sink never stops the caller.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        def _listener() -> None:
            callback()

        self._listeners.append(_listener)
        return Subscription(self._listeners, _listener)

    def fire(self) -> None:
        for cb in list(self._listeners):
            try:
                cb()
            except Exception:
                logger.exception("trigger listener failed: %s", self.name)
