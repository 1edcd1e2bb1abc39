from __future__ import annotations

import pytest

from pong.engine import Game
from pong.host import ManualFrameHost
from pong.settings import GameSettings


@pytest.fixture()
def host() -> ManualFrameHost:
    return ManualFrameHost()


@pytest.fixture()
def game(host: ManualFrameHost) -> Game:
    """A default 600x600 game on a manually stepped clock."""

    return Game(host=host, settings=GameSettings())
