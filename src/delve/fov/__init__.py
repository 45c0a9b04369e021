from .fov import FovMap, sight_line

__all__ = ["FovMap", "sight_line"]
