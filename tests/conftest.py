import sys
from pathlib import Path

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

import pytest  # noqa: E402

from delve.config import GameConstants  # noqa: E402
from delve.dungeon.generator import spawn_item, spawn_monster  # noqa: E402
from delve.engine.engine import new_player  # noqa: E402
from delve.game.state import Game, Messages, World  # noqa: E402
from delve.map.tiles import GameMap  # noqa: E402
from delve.world.entities import EntityList  # noqa: E402
from delve.world.entity import ItemKind  # noqa: E402


class AllVisible:
    """Visibility stub: everything is in view."""

    def is_in_fov(self, x, y):
        return True

    def compute(self, game_map, x, y, radius):
        pass


class NothingVisible:
    def is_in_fov(self, x, y):
        return False

    def compute(self, game_map, x, y, radius):
        pass


class ScriptedTargeter:
    """Answers targeting requests from prepared lists; records the ranges asked for."""

    def __init__(self, tiles=(), monsters=()):
        self.tiles = list(tiles)
        self.monsters = list(monsters)
        self.requests = []

    def tile(self, max_range=None):
        self.requests.append(("tile", max_range))
        return self.tiles.pop(0) if self.tiles else None

    def monster(self, max_range=None):
        self.requests.append(("monster", max_range))
        return self.monsters.pop(0) if self.monsters else None


class ScriptedChooser:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def choose(self, prompt, options):
        self.prompts.append((prompt, list(options)))
        return self.answers.pop(0)


@pytest.fixture
def constants():
    return GameConstants(map_width=20, map_height=15, seed=1234)


@pytest.fixture
def world(constants):
    """Open 18x13 room with the player standing at (5, 5)."""
    game_map = GameMap(constants.map_width, constants.map_height)
    for x in range(1, constants.map_width - 1):
        for y in range(1, constants.map_height - 1):
            game_map.carve(x, y)
    player = new_player(constants)
    player.set_pos(5, 5)
    game = Game(map=game_map, messages=Messages(), inventory=[], dungeon_level=1)
    return World(game=game, entities=EntityList(player), constants=constants)


@pytest.fixture
def add_monster(world):
    def _add(name="orc", x=8, y=5):
        return world.entities.append(spawn_monster(world.constants.content.monsters[name], x, y))

    return _add


@pytest.fixture
def make_item(world):
    def _make(kind=ItemKind.HEAL, x=0, y=0):
        return spawn_item(world.constants.content.items[kind], x, y)

    return _make


@pytest.fixture
def all_visible():
    return AllVisible()


@pytest.fixture
def nothing_visible():
    return NothingVisible()
