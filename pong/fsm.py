from __future__ import annotations

from statemachine import State, StateMachine

from pong.core.observable import Observable
from pong.core.state import RoundStatus, SchedulerStatus


class RoundMachine(StateMachine):
    """Round lifecycle: idle -> running -> finished -> idle.

    `finished` covers the pause between a win and the score reset. `abandon`
    drops a round that the host shuts down before anyone wins.
    """

    idle = State(RoundStatus.idle.value, value=RoundStatus.idle.value, initial=True)
    running = State(RoundStatus.running.value, value=RoundStatus.running.value)
    finished = State(RoundStatus.finished.value, value=RoundStatus.finished.value)

    begin = idle.to(running)
    conclude = running.to(finished)
    settle = finished.to(idle)
    abandon = running.to(idle)

    @property
    def status(self) -> RoundStatus:
        return RoundStatus(str(self.current_state.value))


class SchedulerMachine(StateMachine):
    """Run flag of the simulation loop, mirrored into an observable container."""

    stopped = State(SchedulerStatus.stopped.value, value=SchedulerStatus.stopped.value, initial=True)
    running = State(SchedulerStatus.running.value, value=SchedulerStatus.running.value)

    launch = stopped.to(running)
    halt = running.to(stopped)

    def __init__(self, run_flag: Observable[bool]):
        self.run_flag = run_flag
        super().__init__()

    def on_enter_running(self) -> None:
        self.run_flag.update(True)

    def on_enter_stopped(self) -> None:
        self.run_flag.update(False)

    @property
    def status(self) -> SchedulerStatus:
        return SchedulerStatus(str(self.current_state.value))

    @property
    def is_running(self) -> bool:
        return self.current_state == self.running
