from __future__ import annotations

import datetime as dt
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from platformdirs import PlatformDirs

from .. import __version__
from ..config import GameConstants
from ..exceptions import InvariantViolation, SnapshotDecodeError, SnapshotError, SnapshotVersionError
from ..game.state import World
from ..rng import RandomSource

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def atomic_write_json(path: Path, obj: Dict[str, Any]) -> None:
    """Write JSON next to ``path`` and move it into place, so a crash never leaves half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def encode_rng_state(rng: RandomSource) -> list:
    version, internal, gauss_next = rng.getstate()
    return [version, list(internal), gauss_next]


def decode_rng_state(data: Any) -> tuple:
    try:
        version, internal, gauss_next = data
        return (int(version), tuple(int(v) for v in internal), gauss_next)
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError("Failed to decode RNG state") from e


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int = SCHEMA_VERSION) -> Dict[str, Any]:
    """Bring a decoded payload up to ``to_version``.

    Only version 1 exists, so there is nothing to migrate yet; files written by a
    newer build are rejected.
    """
    if from_version == to_version:
        return data
    if from_version > to_version:
        raise SnapshotVersionError(f"Save schema version {from_version} is newer than supported {to_version}")
    raise SnapshotVersionError(f"No migration from save schema version {from_version}")


class SnapshotManager:
    """Single-slot save file for the whole run state.

    File schema (JSON)::

        {
          "schema_version": 1,
          "game_version": str,
          "created_at": ISO8601,
          "game": {...},        # map, messages, inventory, dungeon level
          "entities": [...],    # index 0 is the player
          "rng_state": [...]    # optional
        }
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        if base_dir is None:
            base_dir = Path(PlatformDirs(appname="Delve", appauthor=False).user_data_dir)
        self.base_dir = Path(base_dir)
        self.save_dir = self.base_dir / "saves"
        self.save_path = self.save_dir / "savegame.json"

    def has_save(self) -> bool:
        return self.save_path.exists()

    def delete(self) -> None:
        if self.save_path.exists():
            self.save_path.unlink()
            logger.info("Deleted save file %s", self.save_path)

    def save(self, world: World, rng: Optional[RandomSource] = None) -> Path:
        world.entities.check_player()
        payload: Dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "game_version": __version__,
            "created_at": dt.datetime.now(dt.timezone.utc).isoformat(),
        }
        payload.update(world.to_dict())
        if rng is not None:
            payload["rng_state"] = encode_rng_state(rng)
        try:
            atomic_write_json(self.save_path, payload)
        except OSError as e:
            raise SnapshotError(f"Failed to write save file {self.save_path}") from e
        logger.info("Saved game to %s", self.save_path)
        return self.save_path

    def _read(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.save_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotDecodeError(f"Failed to read save file {self.save_path}") from e
        if not isinstance(data, dict):
            raise SnapshotDecodeError("Save file root must be an object")
        return data

    def load(self, constants: Optional[GameConstants] = None) -> Tuple[World, Optional[tuple]]:
        """Rebuild the World from disk.

        Returns the world and the saved RNG state (``None`` if none was stored); the
        caller restores it with ``RandomSource.setstate``.
        """
        if not self.save_path.exists():
            raise SnapshotError("No save file found")

        data = self._read()
        try:
            version = int(data.get("schema_version", 0))
        except (TypeError, ValueError) as e:
            raise SnapshotDecodeError("Invalid schema_version") from e
        data = migrate_data(data, from_version=version)

        try:
            world = World.from_dict(data, constants or GameConstants())
            world.entities.check_player()
        except (KeyError, TypeError, ValueError, InvariantViolation) as e:
            raise SnapshotDecodeError("Save file is structurally invalid") from e

        rng_state = decode_rng_state(data["rng_state"]) if data.get("rng_state") is not None else None
        logger.info("Loaded game from %s (written by %s)", self.save_path, data.get("game_version"))
        return world, rng_state

    def metadata(self) -> Optional[Dict[str, Any]]:
        if not self.has_save():
            return None
        data = self._read()
        return {key: data.get(key) for key in ("schema_version", "game_version", "created_at")}


__all__ = ["SnapshotManager", "SCHEMA_VERSION", "atomic_write_json", "migrate_data"]
