from __future__ import annotations

import logging
from typing import Any

import pytest

from pong.engine import Game
from pong.host import ManualFrameHost
from pong.render import LoggingRenderer


class _RecordingSink:
    def __init__(self) -> None:
        self.attributes: list[tuple[str, dict[str, Any]]] = []
        self.texts: list[tuple[str, str]] = []

    def set_attributes(self, entity: str, attributes: dict[str, Any]) -> None:
        self.attributes.append((entity, attributes))

    def set_text(self, entity: str, text: str) -> None:
        self.texts.append((entity, text))


def test_binding_paints_the_initial_frame(game: Game) -> None:
    sink = _RecordingSink()
    game.bind_renderer(sink)

    assert [e for e, _ in sink.attributes] == ["canvas", "paddle_one", "paddle_two", "ball"]
    assert ("ball", {"cx": 300, "cy": 300, "r": 15}) in sink.attributes
    assert sink.texts == [("score_one", "0"), ("score_two", "0"), ("status", "Press Space to Start")]


def test_ticks_publish_ball_and_score_updates(game: Game, host: ManualFrameHost) -> None:
    sink = _RecordingSink()
    game.bind_renderer(sink)
    sink.attributes.clear()
    sink.texts.clear()

    game.ctx.ball.update(cx=10)
    game.start()
    host.run_frame()

    assert ("score_two", "1") in sink.texts
    assert ("status", "") in sink.texts
    assert sink.attributes[-1] == ("ball", {"cx": 302, "cy": 298, "r": 15})


def test_unsubscribed_renderer_stops_receiving(game: Game) -> None:
    sink = _RecordingSink()
    subs = game.bind_renderer(sink)
    for sub in subs:
        sub.unsubscribe()
    sink.texts.clear()

    game.ctx.score_one.update(4)
    assert sink.texts == []


def test_logging_renderer_logs_text_changes_once(caplog: pytest.LogCaptureFixture) -> None:
    renderer = LoggingRenderer()

    with caplog.at_level(logging.INFO, logger="pong.render"):
        renderer.set_text("status", "Player One is Winner")
        renderer.set_text("status", "Player One is Winner")
        renderer.set_attributes("ball", {"cx": 1})

    assert caplog.text.count("status: Player One is Winner") == 1


class _FlakySink(_RecordingSink):
    """Raises on the first ball update after binding, then behaves."""

    def __init__(self) -> None:
        super().__init__()
        self.armed = False

    def set_attributes(self, entity: str, attributes: dict[str, Any]) -> None:
        if self.armed and entity == "ball":
            self.armed = False
            raise RuntimeError("surface lost")
        super().set_attributes(entity, attributes)


def test_failing_renderer_does_not_stall_the_loop(
    game: Game, host: ManualFrameHost, caplog: pytest.LogCaptureFixture
) -> None:
    sink = _FlakySink()
    game.bind_renderer(sink)
    sink.armed = True

    game.start()
    with caplog.at_level(logging.ERROR, logger="pong.render"):
        host.run_frame()

    assert "renderer failed to apply ball" in caplog.text
    assert game.ctx.is_started.current_value() is True
    assert host.pending_frames == 1

    host.run_frame()
    assert sink.attributes[-1] == ("ball", {"cx": 296, "cy": 296, "r": 15})
