from .tiles import GameMap, Tile

__all__ = ["GameMap", "Tile"]
