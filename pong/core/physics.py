"""Ball and paddle interaction for one tick.

Direction convention: `x_dir`/`y_dir` store the incoming velocity and the ball is
displaced by their negation each tick, so a positive `x_dir` moves the ball
towards paddle one (left) and a positive `y_dir` moves it up.
"""

from __future__ import annotations

from dataclasses import dataclass

from pong.core.state import BallState, CanvasBounds, PaddleState, Player


@dataclass(frozen=True, slots=True)
class PhysicsOutcome:
    next_ball: BallState
    x_dir: float
    y_dir: float
    paddle_one_y: float
    # Wall bounce.
    bounce_y: bool
    # Paddle hit.
    bounce_x: bool
    scored_by: Player | None


def hits_paddle_one(ball: BallState, paddle: PaddleState) -> bool:
    return (
        ball.cx - ball.r <= paddle.x + paddle.width
        and ball.cy - ball.r > paddle.y
        and ball.cy + ball.r < paddle.bottom
    )


def hits_paddle_two(ball: BallState, paddle: PaddleState) -> bool:
    return (
        ball.cx + ball.r >= paddle.x
        and ball.cy - ball.r > paddle.y
        and ball.cy + ball.r < paddle.bottom
    )


def pursue(paddle_y: float, target_y: float, speed: float) -> float:
    if paddle_y < target_y:
        return paddle_y + speed
    if paddle_y > target_y:
        return paddle_y - speed
    return paddle_y


def step_physics(
    *,
    ball: BallState,
    paddle_one: PaddleState,
    paddle_two: PaddleState,
    canvas: CanvasBounds,
    x_dir: float,
    y_dir: float,
    paddle_speed: float,
) -> PhysicsOutcome:
    """Compute the next ball position plus bounce and score events.

    Rules run in a fixed order on the position the ball had at the start of the
    tick: wall bounce, left miss, right miss, paddle hit, paddle one pursuit,
    advance. A miss and a paddle hit can both fire on the same tick, in which case
    `x_dir` is flipped twice.

    On a scoring tick the ball is recentred and then advanced by the flipped
    direction, so it leaves the centre on the same tick.
    """

    cx, cy = ball.cx, ball.cy
    bounce_y = False
    scored_by: Player | None = None

    if ball.cy - ball.r <= 0 or ball.cy + ball.r >= canvas.height:
        y_dir = -y_dir
        bounce_y = True

    if ball.cx - ball.r <= 0:
        cx, cy = canvas.center
        scored_by = Player.two
        x_dir = -x_dir

    if ball.cx + ball.r >= canvas.width:
        cx, cy = canvas.center
        scored_by = Player.one
        x_dir = -x_dir

    bounce_x = hits_paddle_one(ball, paddle_one) or hits_paddle_two(ball, paddle_two)
    if bounce_x:
        x_dir = -x_dir

    paddle_one_y = paddle_one.y
    # Only chase while the ball is heading towards paddle one.
    if x_dir > 0:
        paddle_one_y = pursue(paddle_one.y, cy, paddle_speed)

    cx -= x_dir
    cy -= y_dir

    return PhysicsOutcome(
        next_ball=BallState(cx=cx, cy=cy, r=ball.r),
        x_dir=x_dir,
        y_dir=y_dir,
        paddle_one_y=paddle_one_y,
        bounce_y=bounce_y,
        bounce_x=bounce_x,
        scored_by=scored_by,
    )
