class DelveError(Exception):
    """Base error for the delve simulation core."""


class InvariantViolation(DelveError):
    """Raised when a core invariant is broken (a programming error, never a gameplay branch).

    Examples: asking the entity list for the same index twice, or finding something
    other than the player at index 0.
    """


class SnapshotError(DelveError):
    """Raised when a saved game cannot be read or written."""


class SnapshotDecodeError(SnapshotError):
    """Raised when a save file is unreadable or structurally invalid."""


class SnapshotVersionError(SnapshotError):
    """Raised when a save file was written with an unsupported schema version."""
