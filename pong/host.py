"""Per-frame scheduling hosts.

The engine never sleeps or owns a clock. It asks a host for the next frame and
for the one delayed callback it needs (the pause after a win).
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover
        ...


class FrameHost(Protocol):
    def request_frame(self, callback: Callback) -> None:  # pragma: no cover
        ...

    def call_later(self, delay_s: float, callback: Callback) -> TimerHandle:  # pragma: no cover
        ...


class _ManualTimer:
    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualFrameHost:
    """Deterministic host driven by the caller.

    Frames run only when `run_frames` / `run_until` is called; timers run when
    simulated time is moved forward with `advance`. Each frame advances the clock
    by `frame_interval`.
    """

    def __init__(self, *, frame_interval: float = 1 / 60) -> None:
        self.frame_interval = frame_interval
        self.now = 0.0
        self._frames: list[Callback] = []
        self._timers: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def request_frame(self, callback: Callback) -> None:
        self._frames.append(callback)

    def call_later(self, delay_s: float, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(self.now + delay_s, callback)
        heapq.heappush(self._timers, (timer.due, next(self._seq), timer))
        return timer

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, _, t in self._timers if not t.cancelled)

    def run_frame(self) -> bool:
        """Run every callback requested for the current frame. False if none were pending."""

        if not self._frames:
            return False
        frames, self._frames = self._frames, []
        for cb in frames:
            cb()
        self.advance(self.frame_interval)
        return True

    def run_frames(self, n: int) -> int:
        ran = 0
        for _ in range(n):
            if not self.run_frame():
                break
            ran += 1
        return ran

    def run_until(self, predicate: Callable[[], bool], *, limit: int = 10_000) -> int:
        ran = 0
        while not predicate():
            if ran >= limit or not self.run_frame():
                raise RuntimeError(f"condition not reached after {ran} frames")
            ran += 1
        return ran

    def advance(self, seconds: float) -> None:
        self.now += seconds
        while self._timers and self._timers[0][0] <= self.now + 1e-9:
            _, _, timer = heapq.heappop(self._timers)
            if not timer.cancelled:
                timer.callback()


class AsyncioFrameHost:
    """Host backed by a running asyncio event loop."""

    def __init__(self, *, frame_rate: float = 60, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.frame_interval = 1 / frame_rate
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: Callback) -> None:
        self.loop.call_later(self.frame_interval, callback)

    def call_later(self, delay_s: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_s, callback)
