from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

IDLE_PROMPT = "Press Space to Start"
RUNNING_STATUS = ""


class Player(StrEnum):
    one = "one"
    two = "two"


WINNER_MESSAGES: dict[Player, str] = {
    Player.one: "Player One is Winner",
    Player.two: "Player Two is Winner",
}


class Sound(StrEnum):
    wall = "wall"
    hit = "hit"
    score = "score"


class RoundStatus(StrEnum):
    idle = "idle"
    running = "running"
    finished = "finished"


class SchedulerStatus(StrEnum):
    stopped = "stopped"
    running = "running"


@dataclass(frozen=True, slots=True)
class PaddleState:
    """Top-left position and size of one paddle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class BallState:
    cx: float
    cy: float
    r: float


@dataclass(frozen=True, slots=True)
class CanvasBounds:
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2
