# src/storage/state_store.py

"""JSON file store holding the single persisted snapshot."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.snapshot import Snapshot

logger = logging.getLogger("sales_watch.storage")


class StateStoreError(Exception):
    """Raised when the state file cannot be read or written."""


class StateStore:
    """Key-value store with one fixed key for the tracked snapshot.

    The whole file is rewritten on every ``set`` through a temporary
    file and ``os.replace`` so a crash never leaves half a snapshot.
    """

    def __init__(
        self,
        path: Path | None = None,
        key: str | None = None,
    ) -> None:
        self.path: Path = path or Settings.STATE_FILE
        self.key: str = key or Settings.STATE_KEY
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "StateStore initialised, path=%s key=%s", self.path, self.key
        )

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise StateStoreError(
                f"Failed to read {self.path}: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise StateStoreError(
                f"Unexpected content in {self.path}"
            )
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=".state_", suffix=".json"
        )
        replaced = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
            replaced = True
        except (OSError, TypeError, ValueError) as exc:
            raise StateStoreError(
                f"Failed to write {self.path}: {exc}"
            ) from exc
        finally:
            if not replaced:
                Path(tmp_name).unlink(missing_ok=True)

    def get(self) -> Snapshot | None:
        """Return the persisted snapshot, or ``None`` if there is none."""
        stored = self._read_all().get(self.key)
        if not isinstance(stored, dict):
            return None
        return Snapshot.from_dict(stored)

    def set(self, snapshot: Snapshot) -> None:
        """Replace the persisted snapshot."""
        data = self._read_all()
        data[self.key] = snapshot.to_dict()
        self._write_all(data)
        logger.info(
            "Stored snapshot with %d products to %s",
            len(snapshot.products),
            self.path,
        )

    def clear(self) -> bool:
        """Remove the persisted snapshot.

        Returns ``True`` if a snapshot was removed.
        """
        data = self._read_all()
        if self.key not in data:
            return False
        del data[self.key]
        self._write_all(data)
        logger.info("Cleared stored snapshot from %s", self.path)
        return True
