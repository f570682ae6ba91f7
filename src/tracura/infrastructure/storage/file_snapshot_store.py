"""
Tracura - File Snapshot Store

LocalSnapshotStore implementation writing one JSON file per key.
"""
import logging
import os
import re
from pathlib import Path

from tracura.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileSnapshotStore:
    """
    Snapshot store on the local filesystem.

    Implements LocalSnapshotStore protocol. Writes go to a temporary file
    first and are moved into place, so a crash never leaves half a snapshot.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        logger.info(f"FileSnapshotStore initialized: {self.directory}")

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise StorageError(f"Invalid snapshot key: {key!r}", entity_type="snapshot", entity_id=key)
        return self.directory / f"{key}.json"

    def save_snapshot(self, key: str, blob: str) -> None:
        """
        Write a snapshot.

        Raises:
            StorageError: If the file cannot be written
        """
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(blob, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to save snapshot {key}: {e}", exc_info=True)
            raise StorageError(f"Failed to save snapshot: {e}", entity_type="snapshot", entity_id=key) from e
        logger.debug(f"Snapshot saved: {path}")

    def load_snapshot(self, key: str) -> str | None:
        """
        Read a snapshot.

        Returns:
            Stored blob, or None if there is no snapshot file

        Raises:
            StorageError: If the file exists but cannot be read
        """
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load snapshot {key}: {e}", exc_info=True)
            raise StorageError(f"Failed to load snapshot: {e}", entity_type="snapshot", entity_id=key) from e

    def clear_snapshot(self, key: str) -> None:
        """
        Delete a snapshot file (missing files are ignored).

        Raises:
            StorageError: If the file exists but cannot be deleted
        """
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to clear snapshot {key}: {e}", exc_info=True)
            raise StorageError(f"Failed to clear snapshot: {e}", entity_type="snapshot", entity_id=key) from e
