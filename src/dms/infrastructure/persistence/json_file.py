"""Shared file helpers for the JSON-backed repositories.

Each repository owns one JSON file holding a list of records.  I/O and
decoding failures surface as PersistenceError so callers never see raw
OSError or JSONDecodeError.
"""

from __future__ import annotations

import json
from pathlib import Path

from dms.domain.exceptions import PersistenceError


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path.name}: {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def _next_id(self, records: list[dict]) -> int:
        return max((r["id"] for r in records), default=0) + 1

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
