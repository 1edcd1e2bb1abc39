from __future__ import annotations

import math
from dataclasses import dataclass, field

from pong.core.observable import Observable, Record, Trigger
from pong.core.state import (
    IDLE_PROMPT,
    BallState,
    CanvasBounds,
    PaddleState,
    Player,
    Sound,
)


@dataclass(slots=True)
class EngineContext:
    """Every container owned by one game instance.

    Writers per tick: the loop owns ball/direction/score/status, input binding
    owns paddle two, the pursuit rule owns paddle one.
    """

    canvas: Record[CanvasBounds]
    paddle_one: Record[PaddleState]
    paddle_two: Record[PaddleState]
    ball: Record[BallState]
    x_dir: Observable[float]
    y_dir: Observable[float]
    paddle_speed: Observable[float]
    max_score: Observable[int]
    score_one: Observable[int] = field(default_factory=lambda: Observable(0))
    score_two: Observable[int] = field(default_factory=lambda: Observable(0))
    status: Observable[str] = field(default_factory=lambda: Observable(IDLE_PROMPT))
    is_started: Observable[bool] = field(default_factory=lambda: Observable(False))
    clamp_paddles: bool = False
    sounds: dict[Sound, Trigger] = field(default_factory=lambda: {s: Trigger(s.value) for s in Sound})

    @classmethod
    def create(
        cls,
        *,
        canvas_width: float = 600,
        canvas_height: float = 600,
        paddle_width: float = 25,
        paddle_height: float = 100,
        ball_radius: float = 15,
        ball_speed: float = 2,
        paddle_speed: float = 2,
        max_score: int = 7,
        clamp_paddles: bool = False,
    ) -> "EngineContext":
        canvas = CanvasBounds(width=canvas_width, height=canvas_height)
        cx, cy = canvas.center
        return cls(
            canvas=Record(canvas),
            paddle_one=Record(PaddleState(x=0, y=0, width=paddle_width, height=paddle_height)),
            paddle_two=Record(
                PaddleState(x=canvas_width - paddle_width, y=0, width=paddle_width, height=paddle_height)
            ),
            ball=Record(BallState(cx=cx, cy=cy, r=ball_radius)),
            x_dir=Observable(ball_speed),
            y_dir=Observable(ball_speed),
            paddle_speed=Observable(paddle_speed),
            max_score=Observable(max_score),
            clamp_paddles=clamp_paddles,
        )

    def score_cell(self, player: Player) -> Observable[int]:
        return self.score_one if player is Player.one else self.score_two

    def scores(self) -> tuple[int, int]:
        return self.score_one.current_value(), self.score_two.current_value()

    def clamp_paddle_y(self, y: float, paddle: PaddleState) -> float:
        if not self.clamp_paddles:
            return y
        upper = self.canvas.current_value().height - paddle.height
        return min(max(y, 0.0), max(upper, 0.0))

    # Configuration setters. Values are assumed valid; see pong.settings.apply_config.

    def set_paddle_speed(self, speed: float) -> None:
        self.paddle_speed.update(speed)

    def set_ball_speed(self, speed: float) -> None:
        self.x_dir.update(math.copysign(speed, self.x_dir.current_value()))
        self.y_dir.update(math.copysign(speed, self.y_dir.current_value()))

    def set_max_score(self, max_score: int) -> None:
        self.max_score.update(max_score)

    def set_paddle_width(self, width: float) -> None:
        self.paddle_one.update(width=width)
        # Paddle two's outer edge stays flush with the far wall.
        self.paddle_two.update(width=width, x=self.canvas.current_value().width - width)

    def set_paddle_height(self, height: float) -> None:
        self.paddle_one.update(height=height)
        self.paddle_two.update(height=height)
