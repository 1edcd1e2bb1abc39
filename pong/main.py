from __future__ import annotations

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from pong.core.state import Sound
from pong.engine import Game
from pong.host import AsyncioFrameHost
from pong.render import LoggingRenderer
from pong.settings import GameSettings, settings_from_env

logger = logging.getLogger(__name__)


async def run_demo(*, settings: GameSettings, seconds: float, autopilot: bool = True) -> Game:
    """Run a headless game on the asyncio loop for a fixed wall-clock duration."""

    host = AsyncioFrameHost(frame_rate=settings.frame_rate)
    game = Game(host=host, settings=settings)
    game.bind_renderer(LoggingRenderer())
    for sound in Sound:
        game.on_sound(sound, lambda sound=sound: logger.debug("sound: %s", sound.value))

    if autopilot:
        # Stand-in for a pointer following the ball.
        game.ctx.ball.subscribe(lambda ball: game.pointer_move(ball.cy))

    game.key_down("Space")
    await asyncio.sleep(seconds)
    # Halt before asyncio.run tears the event loop down with a frame still queued.
    game.stop()
    logger.info("demo finished after %d ticks (score %d:%d)", game.loop.ticks, *game.ctx.scores())
    return game


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    logging.basicConfig(level=os.environ.get("PONG_LOG_LEVEL", "INFO").upper())

    parser = argparse.ArgumentParser(prog="pong-sim", description="Run a headless pong simulation.")
    parser.add_argument("--seconds", type=float, default=10.0)
    parser.add_argument("--no-autopilot", action="store_true", help="leave player two idle")
    args = parser.parse_args(argv)

    settings = settings_from_env()
    asyncio.run(run_demo(settings=settings, seconds=args.seconds, autopilot=not args.no_autopilot))


if __name__ == "__main__":
    main()
