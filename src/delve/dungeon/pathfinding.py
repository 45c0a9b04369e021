from collections import deque
from typing import Optional, Set, Tuple

from ..map.tiles import GameMap

Coord = Tuple[int, int]


def _neighbors4(game_map: GameMap, x: int, y: int):
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        nx, ny = x + dx, y + dy
        if game_map.in_bounds(nx, ny):
            yield nx, ny


def find_path_bfs(game_map: GameMap, start: Coord, goal: Coord) -> Optional[int]:
    """Shortest 4-directional path length over open tiles, or None if unreachable."""
    if game_map.is_blocked(*start) or game_map.is_blocked(*goal):
        return None
    q = deque([(start, 0)])
    seen = {start}
    while q:
        (x, y), d = q.popleft()
        if (x, y) == goal:
            return d
        for nxt in _neighbors4(game_map, x, y):
            if nxt not in seen and not game_map.is_blocked(*nxt):
                seen.add(nxt)
                q.append((nxt, d + 1))
    return None


def reachable_from(game_map: GameMap, start: Coord) -> Set[Coord]:
    """Every open tile connected to ``start``."""
    if game_map.is_blocked(*start):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for nxt in _neighbors4(game_map, x, y):
            if nxt not in seen and not game_map.is_blocked(*nxt):
                seen.add(nxt)
                q.append(nxt)
    return seen
