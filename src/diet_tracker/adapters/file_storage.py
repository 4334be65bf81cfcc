"""Key-value storage backed by a JSON file on local disk."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from diet_tracker.errors import PersistenceError
from diet_tracker.services.store import KeyValueStorage


@dataclass
class FileKeyValueStorage(KeyValueStorage):
    """Stores string values under string keys in a single JSON file."""

    path: Path

    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``."""
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise PersistenceError(f"Value for {key!r} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        entries = self._read_all()
        entries[key] = value
        self._write_all(entries)

    def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""
        entries = self._read_all()
        if entries.pop(key, None) is not None:
            self._write_all(entries)

    def _read_all(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}") from exc
        try:
            entries = json.loads(raw) if raw.strip() else {}
        except ValueError as exc:
            raise PersistenceError(f"Storage file {self.path} is corrupt") from exc
        if not isinstance(entries, dict):
            raise PersistenceError(f"Storage file {self.path} is corrupt")
        return entries

    def _write_all(self, entries: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(entries, handle)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self.path}") from exc
