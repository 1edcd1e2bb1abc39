from __future__ import annotations

import pytest

from pong.core.physics import pursue, step_physics
from pong.core.state import BallState, CanvasBounds, PaddleState, Player

CANVAS = CanvasBounds(width=600, height=600)
PADDLE_ONE = PaddleState(x=0, y=0, width=25, height=100)
PADDLE_TWO = PaddleState(x=575, y=0, width=25, height=100)


def _step(ball: BallState, *, x_dir: float = 2, y_dir: float = 2, paddle_one: PaddleState = PADDLE_ONE, speed: float = 2):
    return step_physics(
        ball=ball,
        paddle_one=paddle_one,
        paddle_two=PADDLE_TWO,
        canvas=CANVAS,
        x_dir=x_dir,
        y_dir=y_dir,
        paddle_speed=speed,
    )


def test_free_ball_moves_against_stored_direction() -> None:
    out = _step(BallState(cx=300, cy=300, r=15), x_dir=2, y_dir=-3)

    assert out.next_ball == BallState(cx=298, cy=303, r=15)
    assert (out.x_dir, out.y_dir) == (2, -3)
    assert not out.bounce_x and not out.bounce_y
    assert out.scored_by is None


@pytest.mark.parametrize(("cy", "y_dir"), [(15, 2), (10, 2), (585, -2), (599, -2)])
def test_wall_flips_y_direction_keeping_magnitude(cy: float, y_dir: float) -> None:
    out = _step(BallState(cx=300, cy=cy, r=15), y_dir=y_dir)

    assert out.bounce_y
    assert out.y_dir == -y_dir
    assert out.next_ball.cy == cy + y_dir


def test_left_miss_credits_player_two_and_recentres() -> None:
    out = _step(BallState(cx=10, cy=300, r=15), x_dir=2)

    assert out.scored_by is Player.two
    assert out.x_dir == -2
    assert out.next_ball == BallState(cx=302, cy=298, r=15)
    assert not out.bounce_x


def test_right_miss_credits_player_one_and_recentres() -> None:
    out = _step(BallState(cx=590, cy=300, r=15), x_dir=-2)

    assert out.scored_by is Player.one
    assert out.x_dir == 2
    assert out.next_ball == BallState(cx=298, cy=298, r=15)


def test_recentre_uses_canvas_centre() -> None:
    out = step_physics(
        ball=BallState(cx=5, cy=100, r=15),
        paddle_one=PADDLE_ONE,
        paddle_two=PaddleState(x=775, y=0, width=25, height=100),
        canvas=CanvasBounds(width=800, height=400),
        x_dir=2,
        y_dir=2,
        paddle_speed=2,
    )
    assert (out.next_ball.cx, out.next_ball.cy) == (402, 198)


def test_paddle_two_hit_sends_ball_back() -> None:
    out = _step(BallState(cx=565, cy=50, r=15), x_dir=-2)

    assert out.bounce_x
    assert out.x_dir == 2
    assert out.next_ball.cx == 563
    assert out.scored_by is None


def test_paddle_one_hit_sends_ball_back() -> None:
    out = _step(BallState(cx=35, cy=50, r=15), x_dir=2)

    assert out.bounce_x
    assert out.x_dir == -2
    assert out.next_ball.cx == 37


def test_ball_must_lie_strictly_inside_paddle_extent() -> None:
    # Touching the paddle's top edge is not a hit.
    out = _step(BallState(cx=565, cy=15, r=15), x_dir=-2, y_dir=-2)
    assert not out.bounce_x


def test_miss_and_paddle_overlap_on_same_tick_both_flip() -> None:
    out = _step(BallState(cx=10, cy=50, r=15), x_dir=2)

    assert out.scored_by is Player.two
    assert out.bounce_x
    # Flipped by the miss and again by the hit.
    assert out.x_dir == 2
    assert out.next_ball == BallState(cx=298, cy=298, r=15)


def test_paddle_one_chases_ball_only_while_it_approaches() -> None:
    paddle = PaddleState(x=0, y=100, width=25, height=100)

    approaching = _step(BallState(cx=300, cy=300, r=15), x_dir=2, paddle_one=paddle, speed=3)
    leaving = _step(BallState(cx=300, cy=300, r=15), x_dir=-2, paddle_one=paddle, speed=3)

    assert approaching.paddle_one_y == 103
    assert leaving.paddle_one_y == 100


def test_pursue_moves_one_step_towards_target() -> None:
    assert pursue(10, 50, 2) == 12
    assert pursue(50, 10, 2) == 48
    assert pursue(50, 50, 2) == 50


def test_step_is_deterministic() -> None:
    ball = BallState(cx=123, cy=456, r=15)
    assert _step(ball) == _step(ball)
