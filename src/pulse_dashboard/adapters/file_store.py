"""File-backed key-value store."""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pulse_dashboard.services.cache import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as ``<directory>/<key>.json``."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return the file contents for ``key``, or None if absent or unreadable."""
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            _logger.warning("Store read failed: path=%s error=%s", path, exc)
            return None

    def write(self, key: str, value: str) -> bool:
        """Atomically replace the file for ``key``."""
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            _logger.warning("Store write failed: path=%s error=%s", path, exc)
            return False
        return True

    def delete(self, key: str) -> bool:
        """Remove the file for ``key`` if it exists."""
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            _logger.warning("Store delete failed: path=%s error=%s", path, exc)
            return False
        return True

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
