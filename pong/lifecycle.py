from __future__ import annotations

import logging

from pong.core.context import EngineContext
from pong.core.state import IDLE_PROMPT, WINNER_MESSAGES, Player, RoundStatus
from pong.fsm import RoundMachine, SchedulerMachine
from pong.host import FrameHost, TimerHandle

logger = logging.getLogger(__name__)

WIN_PAUSE_S = 3.0


def winner_for(score_one: int, score_two: int) -> Player:
    """Player two wins only with strictly more points; a tie goes to player one."""

    return Player.two if score_one < score_two else Player.one


class RoundLifecycle:
    """Scores, win detection and the timed reset after a win."""

    def __init__(
        self,
        *,
        ctx: EngineContext,
        host: FrameHost,
        scheduler: SchedulerMachine,
        pause_s: float = WIN_PAUSE_S,
    ) -> None:
        self.ctx = ctx
        self.host = host
        self.scheduler = scheduler
        self.pause_s = pause_s
        self.machine = RoundMachine()
        self._pending_reset: TimerHandle | None = None

    @property
    def status(self) -> RoundStatus:
        return self.machine.status

    def begin(self) -> None:
        if self.machine.current_state == self.machine.finished:
            self._cancel_pending_reset()
            self.reset_round()
        self.machine.begin()

    def abandon(self) -> None:
        if self.machine.current_state == self.machine.running:
            self.machine.abandon()

    def check_for_winner(self) -> Player | None:
        """Stop the loop and start the pause if either score reached the maximum."""

        score_one, score_two = self.ctx.scores()
        max_score = self.ctx.max_score.current_value()
        if score_one < max_score and score_two < max_score:
            return None

        winner = winner_for(score_one, score_two)
        if self.scheduler.is_running:
            self.scheduler.halt()
        self.machine.conclude()
        self.ctx.status.update(WINNER_MESSAGES[winner])
        logger.info("round won by player %s (%d:%d)", winner.value, score_one, score_two)

        self._pending_reset = self.host.call_later(self.pause_s, self.reset_round)
        return winner

    def reset_round(self) -> None:
        self._pending_reset = None
        self.ctx.status.update(IDLE_PROMPT)
        self.ctx.score_one.update(0)
        self.ctx.score_two.update(0)
        self.machine.settle()
        logger.info("scores reset")

    def _cancel_pending_reset(self) -> None:
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None
            logger.info("start during win pause; resetting early")
