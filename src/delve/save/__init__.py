from .snapshot import SnapshotManager

__all__ = ["SnapshotManager"]
