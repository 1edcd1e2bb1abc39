from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pong.core.context import EngineContext
from pong.core.observable import Subscription
from pong.core.state import RoundStatus, SchedulerStatus, Sound
from pong.fsm import SchedulerMachine
from pong.game_loop import SimulationLoop
from pong.host import FrameHost
from pong.input_binding import PlayerInput
from pong.lifecycle import RoundLifecycle
from pong.render import RenderSink, bind_renderer
from pong.settings import ConfigUpdate, GameSettings, apply_config


class Game:
    """One local two-player game: containers, loop, lifecycle and input wired together."""

    def __init__(self, *, host: FrameHost, settings: GameSettings | None = None) -> None:
        self.settings = settings or GameSettings()
        self.host = host
        self.ctx: EngineContext = self.settings.build_context()
        self.scheduler = SchedulerMachine(self.ctx.is_started)
        self.lifecycle = RoundLifecycle(
            ctx=self.ctx,
            host=host,
            scheduler=self.scheduler,
            pause_s=self.settings.win_pause_ms / 1000,
        )
        self.loop = SimulationLoop(
            ctx=self.ctx,
            host=host,
            scheduler=self.scheduler,
            lifecycle=self.lifecycle,
        )
        self.input = PlayerInput(ctx=self.ctx, on_start=self.loop.start)

    @property
    def round_status(self) -> RoundStatus:
        return self.lifecycle.status

    @property
    def scheduler_status(self) -> SchedulerStatus:
        return self.scheduler.status

    def start(self) -> bool:
        return self.loop.start()

    def stop(self) -> bool:
        return self.loop.stop()

    def key_down(self, code: str) -> None:
        self.input.key_down(code)

    def pointer_move(self, y: float) -> None:
        self.input.pointer_move(y)

    def configure(self, **raw: Any) -> ConfigUpdate:
        return apply_config(self.ctx, **raw)

    def bind_renderer(self, sink: RenderSink) -> list[Subscription]:
        return bind_renderer(self.ctx, sink)

    def on_sound(self, sound: Sound, callback: Callable[[], None]) -> Subscription:
        return self.ctx.sounds[sound].subscribe(callback)
