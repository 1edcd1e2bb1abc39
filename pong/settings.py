from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pong.core.context import EngineContext

ENV_PREFIX = "PONG_"


class GameSettings(BaseModel):
    """Session settings; fixed once the game is created."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    canvas_width: float = Field(600, gt=0, allow_inf_nan=False)
    canvas_height: float = Field(600, gt=0, allow_inf_nan=False)
    paddle_width: float = Field(25, gt=0, allow_inf_nan=False)
    paddle_height: float = Field(100, gt=0, allow_inf_nan=False)
    ball_radius: float = Field(15, gt=0, allow_inf_nan=False)
    ball_speed: float = Field(2, gt=0, allow_inf_nan=False)
    paddle_speed: float = Field(2, gt=0, allow_inf_nan=False)
    max_score: int = Field(7, gt=0)
    win_pause_ms: int = Field(3000, ge=0)
    frame_rate: float = Field(60, gt=0, allow_inf_nan=False)
    # Off by default: paddles may be driven past the canvas edges.
    clamp_paddles: bool = False

    def build_context(self) -> EngineContext:
        return EngineContext.create(
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
            paddle_width=self.paddle_width,
            paddle_height=self.paddle_height,
            ball_radius=self.ball_radius,
            ball_speed=self.ball_speed,
            paddle_speed=self.paddle_speed,
            max_score=self.max_score,
            clamp_paddles=self.clamp_paddles,
        )


class ConfigUpdate(BaseModel):
    """Runtime configuration inputs; each takes effect on the next tick."""

    model_config = ConfigDict(extra="forbid")

    paddle_speed: float | None = Field(None, gt=0, allow_inf_nan=False)
    ball_speed: float | None = Field(None, gt=0, allow_inf_nan=False)
    max_score: int | None = Field(None, gt=0)
    paddle_width: float | None = Field(None, gt=0, allow_inf_nan=False)
    paddle_height: float | None = Field(None, gt=0, allow_inf_nan=False)


def settings_from_env(environ: dict[str, str] | None = None) -> GameSettings:
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for name in GameSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw
    return GameSettings.model_validate(values)


def apply_config(ctx: EngineContext, **raw: Any) -> ConfigUpdate:
    """Validate raw input values, then hand them to the core setters.

    Raises pydantic.ValidationError without touching the engine if any value is bad.
    """

    update = ConfigUpdate.model_validate(raw)

    if update.paddle_speed is not None:
        ctx.set_paddle_speed(update.paddle_speed)
    if update.ball_speed is not None:
        ctx.set_ball_speed(update.ball_speed)
    if update.max_score is not None:
        ctx.set_max_score(update.max_score)
    if update.paddle_width is not None:
        ctx.set_paddle_width(update.paddle_width)
    if update.paddle_height is not None:
        ctx.set_paddle_height(update.paddle_height)
    return update
