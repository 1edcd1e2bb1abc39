from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Protocol

from pong.core.context import EngineContext
from pong.core.observable import Subscription

logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    """Whatever owns the visual surface.

    Records arrive attribute-by-attribute, scalars as whole text values.
    """

    def set_attributes(self, entity: str, attributes: dict[str, Any]) -> None:  # pragma: no cover
        ...

    def set_text(self, entity: str, text: str) -> None:  # pragma: no cover
        ...


def bind_renderer(ctx: EngineContext, sink: RenderSink) -> list[Subscription]:
    """Subscribe the sink to every renderable container; replay paints the first frame.

    Sink failures are logged and skipped so a broken renderer never stalls the loop.
    """

    def _attributes(entity: str, value: Any) -> None:
        try:
            sink.set_attributes(entity, asdict(value))
        except Exception:
            logger.exception("renderer failed to apply %s", entity)

    def _text(entity: str, text: str) -> None:
        try:
            sink.set_text(entity, text)
        except Exception:
            logger.exception("renderer failed to apply %s", entity)

    subs: list[Subscription] = []
    for entity, record in (
        ("canvas", ctx.canvas),
        ("paddle_one", ctx.paddle_one),
        ("paddle_two", ctx.paddle_two),
        ("ball", ctx.ball),
    ):
        subs.append(record.subscribe(lambda value, entity=entity: _attributes(entity, value)))

    for entity, cell in (("score_one", ctx.score_one), ("score_two", ctx.score_two)):
        subs.append(cell.subscribe(lambda value, entity=entity: _text(entity, str(value))))

    subs.append(ctx.status.subscribe(lambda value: _text("status", value)))
    return subs


class LoggingRenderer:
    """Headless sink: logs score and status text, ignores geometry."""

    def __init__(self) -> None:
        self.texts: dict[str, str] = {}

    def set_attributes(self, entity: str, attributes: dict[str, Any]) -> None:
        return None

    def set_text(self, entity: str, text: str) -> None:
        if self.texts.get(entity) == text:
            return
        self.texts[entity] = text
        if text:
            logger.info("%s: %s", entity, text)
