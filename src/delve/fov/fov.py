from __future__ import annotations

import logging
from typing import List, Set, Tuple

from ..map.tiles import GameMap

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def sight_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """Tiles stepped through from (x0, y0) to (x1, y1), both ends included.

    One tile per step along the longer axis; the shorter axis is interpolated and
    rounded half up, so the line is the same length whichever way it is walked.
    """
    steps = max(abs(x1 - x0), abs(y1 - y0))
    if steps == 0:
        return [(x0, y0)]
    span_x, span_y = x1 - x0, y1 - y0
    return [
        (x0 + (2 * span_x * i + steps) // (2 * steps), y0 + (2 * span_y * i + steps) // (2 * steps))
        for i in range(steps + 1)
    ]


def has_line_of_sight(game_map: GameMap, x0: int, y0: int, x1: int, y1: int) -> bool:
    """Every tile strictly between the endpoints must let sight through.

    The target itself may be opaque, so the walls bounding a room are lit.
    """
    line = sight_line(x0, y0, x1, y1)
    for x, y in line[1:-1]:
        if game_map.blocks_sight(x, y):
            return False
    return True


class FovMap:
    """Default visibility service: line-of-sight field of view within a square radius.

    ``compute`` also marks every visible tile as explored on the map.
    """

    def __init__(self) -> None:
        self._visible: Set[Coord] = set()

    def is_in_fov(self, x: int, y: int) -> bool:
        return (x, y) in self._visible

    def compute(self, game_map: GameMap, x: int, y: int, radius: int) -> None:
        if radius < 0:
            raise ValueError("radius must be >= 0")
        visible: Set[Coord] = set()
        if game_map.in_bounds(x, y):
            visible.add((x, y))
        min_x, max_x = max(0, x - radius), min(game_map.width - 1, x + radius)
        min_y, max_y = max(0, y - radius), min(game_map.height - 1, y + radius)
        for ty in range(min_y, max_y + 1):
            for tx in range(min_x, max_x + 1):
                if (tx, ty) != (x, y) and has_line_of_sight(game_map, x, y, tx, ty):
                    visible.add((tx, ty))
        for vx, vy in visible:
            game_map.tiles[vx][vy].explored = True
        self._visible = visible
        logger.debug("FOV from (%d,%d) radius %d -> %d visible tiles", x, y, radius, len(visible))


__all__ = ["FovMap", "sight_line", "has_line_of_sight"]
