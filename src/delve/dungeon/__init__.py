from .generator import STAIRS_NAME, DungeonGenerator, GeneratedLevel, Rect

__all__ = ["DungeonGenerator", "GeneratedLevel", "Rect", "STAIRS_NAME"]
