from __future__ import annotations

import logging

from pong.core.context import EngineContext
from pong.core.observable import increment
from pong.core.physics import PhysicsOutcome, step_physics
from pong.core.state import IDLE_PROMPT, RUNNING_STATUS, Sound
from pong.fsm import SchedulerMachine
from pong.host import FrameHost
from pong.lifecycle import RoundLifecycle

logger = logging.getLogger(__name__)


class SimulationLoop:
    """Drives one tick per host frame while the scheduler is running.

    Contract:
      - `start()` is the edge-triggered start signal; a no-op while running.
      - `tick()` reads every container, runs physics, writes the results back,
        fires audio triggers, checks for a winner and requests the next frame.
      - during play the loop only stops through the round lifecycle; `stop()` is
        reserved for host shutdown.
    """

    def __init__(
        self,
        *,
        ctx: EngineContext,
        host: FrameHost,
        scheduler: SchedulerMachine,
        lifecycle: RoundLifecycle,
    ) -> None:
        self.ctx = ctx
        self.host = host
        self.scheduler = scheduler
        self.lifecycle = lifecycle
        self.ticks = 0
        self._frame_pending = False

    @property
    def is_running(self) -> bool:
        return self.scheduler.is_running

    def start(self) -> bool:
        if self.scheduler.is_running:
            return False

        self.lifecycle.begin()
        self.scheduler.launch()
        self.ctx.status.update(RUNNING_STATUS)
        logger.info("round started")
        self._request_frame()
        return True

    def stop(self) -> bool:
        """Host shutdown. Scores are kept; an already requested frame only restores the idle prompt."""

        if not self.scheduler.is_running:
            return False

        self.scheduler.halt()
        self.lifecycle.abandon()
        self.ctx.status.update(IDLE_PROMPT)
        logger.info("loop stopped by host")
        return True

    def tick(self) -> None:
        if not self.scheduler.is_running:
            self.ctx.status.update(IDLE_PROMPT)
            return

        if self.lifecycle.check_for_winner() is not None:
            return

        ctx = self.ctx
        outcome = step_physics(
            ball=ctx.ball.current_value(),
            paddle_one=ctx.paddle_one.current_value(),
            paddle_two=ctx.paddle_two.current_value(),
            canvas=ctx.canvas.current_value(),
            x_dir=ctx.x_dir.current_value(),
            y_dir=ctx.y_dir.current_value(),
            paddle_speed=ctx.paddle_speed.current_value(),
        )
        self._write_back(outcome)
        self.ticks += 1

        if outcome.scored_by is not None and self.lifecycle.check_for_winner() is not None:
            return

        self._request_frame()

    def _request_frame(self) -> None:
        # At most one frame in flight, even after a stop and restart.
        if self._frame_pending:
            return
        self._frame_pending = True
        self.host.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_pending = False
        self.tick()

    def _write_back(self, outcome: PhysicsOutcome) -> None:
        ctx = self.ctx

        if outcome.bounce_y:
            ctx.y_dir.update(outcome.y_dir)
            ctx.sounds[Sound.wall].fire()

        if outcome.scored_by is not None:
            score = increment(ctx.score_cell(outcome.scored_by))
            logger.debug("player %s scored (%d)", outcome.scored_by.value, score)
            ctx.sounds[Sound.score].fire()

        if outcome.bounce_x:
            ctx.sounds[Sound.hit].fire()

        if outcome.x_dir != ctx.x_dir.current_value():
            ctx.x_dir.update(outcome.x_dir)

        paddle_one = ctx.paddle_one.current_value()
        if outcome.paddle_one_y != paddle_one.y:
            ctx.paddle_one.update(y=ctx.clamp_paddle_y(outcome.paddle_one_y, paddle_one))

        ctx.ball.update(cx=outcome.next_ball.cx, cy=outcome.next_ball.cy)
