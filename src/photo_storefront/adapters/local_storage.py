"""Durable key-value storage for client state."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Interface for a string key-value store that survives restarts."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> bool:
        """Store a value and return whether the write succeeded."""

    def remove(self, key: str) -> bool:
        """Remove a key and return whether the write succeeded."""


@dataclass
class InMemoryStore(KeyValueStore):
    """Process-local store with no durability."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True

    def remove(self, key: str) -> bool:
        self.values.pop(key, None)
        return True


@dataclass
class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object on disk.

    Every write rewrites the whole file through a temporary file so a crash
    mid-write never leaves a truncated store behind. Write failures are
    logged and reported as ``False`` rather than raised.
    """

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        """Store a value under a key."""
        values = self._load()
        values[key] = value
        return self._write(values)

    def remove(self, key: str) -> bool:
        """Remove a key; removing a missing key is not an error."""
        values = self._load()
        if key not in values:
            return True
        del values[key]
        return self._write(values)

    def _load(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            logger.exception("Failed to read local store", extra={"path": self.path})
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Local store %s is not valid JSON; ignoring it", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local store %s is not an object; ignoring it", self.path)
            return {}
        return data

    def _write(self, values: dict[str, object]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError:
            logger.exception("Failed to write local store", extra={"path": self.path})
            return False
        return True
