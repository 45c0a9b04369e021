from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import GameConstants
from .engine import Engine, PlayerAction, Wait
from .logging_config import configure_logging
from .rng import RandomSource
from .save import SnapshotManager
from .world.entities import PLAYER

logger = logging.getLogger(__name__)


def render_ascii(engine: Engine) -> List[str]:
    """Map rows with entity glyphs drawn on top; the player is drawn last."""
    world = engine.world
    rows = [list(row) for row in world.map.to_ascii()]
    for index, entity in world.entities.enumerate():
        if index != PLAYER and world.map.in_bounds(entity.x, entity.y):
            rows[entity.y][entity.x] = entity.glyph
    player = world.player
    rows[player.y][player.x] = player.glyph
    return ["".join(row) for row in rows]


def load_constants(config: Optional[Path]) -> GameConstants:
    base = GameConstants.from_yaml(config) if config is not None else None
    return GameConstants.from_env(base)


def run(
    constants: GameConstants, level: int = 1, auto_turns: int = 0, save_dir: Optional[Path] = None
) -> Engine:
    engine = Engine.new_game(constants, RandomSource(constants.seed))
    while engine.world.game.dungeon_level < level:
        engine.next_level()
    for turn in range(auto_turns):
        if engine.step(Wait()) is PlayerAction.EXIT or not engine.player_alive:
            logger.info("Run ended after %d turns", turn + 1)
            break
    if save_dir is not None:
        SnapshotManager(base_dir=save_dir).save(engine.world, engine.rng)
    return engine


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="delve", description="Headless dungeon-crawl simulation runner")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Seed for map generation and AI")
    parser.add_argument("--level", type=int, default=1, help="Dungeon level to generate")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with game constants")
    parser.add_argument("--auto-turns", type=int, default=0, help="Let the player wait N turns")
    parser.add_argument("--save-dir", type=Path, default=None, help="Write a save file under this directory")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    if args.level < 1:
        parser.error("--level must be >= 1")

    constants = load_constants(args.config)
    if args.seed is not None:
        constants = constants.model_copy(update={"seed": args.seed})

    engine = run(constants, level=args.level, auto_turns=max(0, args.auto_turns), save_dir=args.save_dir)

    for row in render_ascii(engine):
        print(row)
    sheet = engine.character_sheet()
    fighter = engine.world.player.fighter
    hp = fighter.hp if fighter else 0
    print(
        f"Dungeon level {engine.world.game.dungeon_level} | HP {hp}/{sheet.max_hp} | "
        f"Level {sheet.level} | XP {sheet.xp}/{sheet.xp_to_level_up}"
    )
    for text, _ in engine.world.messages.last(5):
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
