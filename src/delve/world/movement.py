from __future__ import annotations

import logging
import math

from ..map.tiles import GameMap
from .entities import EntityList

logger = logging.getLogger(__name__)


def is_blocked(x: int, y: int, game_map: GameMap, entities: EntityList) -> bool:
    """True if the tile is impassable or a blocking entity stands on it."""
    if game_map.is_blocked(x, y):
        return True
    return any(e.blocks and e.x == x and e.y == y for e in entities)


def move_by(index: int, dx: int, dy: int, game_map: GameMap, entities: EntityList) -> bool:
    """Move the entity by (dx, dy) if the destination is free. Returns whether it moved."""
    entity = entities[index]
    x, y = entity.x + dx, entity.y + dy
    if is_blocked(x, y, game_map, entities):
        return False
    entity.set_pos(x, y)
    return True


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def step_towards(dx: int, dy: int) -> tuple:
    """Unit direction to (dx, dy) rounded to a grid step in {-1, 0, 1} per axis."""
    distance = math.hypot(dx, dy)
    if distance == 0:
        return (0, 0)
    return (_round_half_away(dx / distance), _round_half_away(dy / distance))


def move_towards(index: int, target_x: int, target_y: int, game_map: GameMap, entities: EntityList) -> bool:
    entity = entities[index]
    dx, dy = step_towards(target_x - entity.x, target_y - entity.y)
    if (dx, dy) == (0, 0):
        return False
    return move_by(index, dx, dy, game_map, entities)


__all__ = ["is_blocked", "move_by", "move_towards", "step_towards"]
