from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


@dataclass
class Tile:
    """Map tile flags. ``explored`` is written by the field-of-view pass."""

    blocked: bool = False
    explored: bool = False
    block_sight: bool = False

    @classmethod
    def empty(cls) -> "Tile":
        return cls(blocked=False, explored=False, block_sight=False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocked=True, explored=False, block_sight=True)

    def encode(self) -> str:
        return str(int(self.blocked) | int(self.explored) << 1 | int(self.block_sight) << 2)

    @classmethod
    def decode(cls, code: str) -> "Tile":
        bits = int(code)
        return cls(blocked=bool(bits & 1), explored=bool(bits & 2), block_sight=bool(bits & 4))


class GameMap:
    """Fixed-size grid of tiles indexed as ``tiles[x][y]``.

    Coordinates are (x, y) with (0, 0) at top-left. Out-of-bounds positions behave
    as walls for movement and sight.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Invalid map size")
        self.width = width
        self.height = height
        self.tiles: List[List[Tile]] = [[Tile.wall() for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        return self.tiles[x][y]

    def is_blocked(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self.tiles[x][y].blocked

    def blocks_sight(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self.tiles[x][y].block_sight

    def carve(self, x: int, y: int) -> None:
        self.tiles[x][y] = Tile.empty()

    def to_ascii(self) -> List[str]:
        return [
            "".join("#" if self.tiles[x][y].blocked else "." for x in range(self.width))
            for y in range(self.height)
        ]

    def to_dict(self) -> Dict[str, Any]:
        # One string per column, one digit per tile
        return {
            "width": self.width,
            "height": self.height,
            "tiles": ["".join(t.encode() for t in column) for column in self.tiles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameMap":
        game_map = cls(int(data["width"]), int(data["height"]))
        columns = data["tiles"]
        if len(columns) != game_map.width or any(len(c) != game_map.height for c in columns):
            raise ValueError("Tile data does not match map dimensions")
        game_map.tiles = [[Tile.decode(code) for code in column] for column in columns]
        return game_map


__all__ = ["Tile", "GameMap"]
