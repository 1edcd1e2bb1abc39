from __future__ import annotations

from collections.abc import Callable

from pong.core.context import EngineContext

START_KEY = "Space"
UP_KEY = "ArrowUp"
DOWN_KEY = "ArrowDown"


class PlayerInput:
    """Maps key and pointer events onto paddle two.

    Moves are ignored unless the loop is running. Every write goes through the
    paddle-two container so input and ticks never overwrite each other.
    """

    def __init__(self, *, ctx: EngineContext, on_start: Callable[[], object]) -> None:
        self.ctx = ctx
        self.on_start = on_start
        self._moves: dict[str, int] = {UP_KEY: -1, DOWN_KEY: 1}

    def key_down(self, code: str) -> None:
        if code == START_KEY:
            if not self.ctx.is_started.current_value():
                self.on_start()
            return

        sign = self._moves.get(code)
        if sign is None or not self.ctx.is_started.current_value():
            return

        step = sign * self.ctx.paddle_speed.current_value()
        self.ctx.paddle_two.apply(lambda p: {"y": self.ctx.clamp_paddle_y(p.y + step, p)})

    def pointer_move(self, y: float) -> None:
        if not self.ctx.is_started.current_value():
            return
        self.ctx.paddle_two.apply(lambda p: {"y": self.ctx.clamp_paddle_y(y - p.height / 2, p)})
