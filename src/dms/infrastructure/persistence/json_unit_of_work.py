"""Unit of work over a set of JSON files.

``begin`` snapshots the guarded files; ``rollback`` writes the snapshots
back.  Good enough for a single operator process, which is all the JSON
backend supports.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dms.domain.exceptions import (
    PersistenceError,
    RollbackFailedError,
    ValidationError,
)
from dms.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, *file_paths: Path) -> None:
        self._file_paths = file_paths
        self._snapshot: dict[Path, str] | None = None

    def begin(self) -> None:
        if self._snapshot is not None:
            raise ValidationError("Unit of work already in progress")
        try:
            self._snapshot = {
                path: path.read_text(encoding="utf-8") for path in self._file_paths
            }
        except OSError as exc:
            raise PersistenceError(f"Cannot start unit of work: {exc}") from exc

    def commit(self) -> None:
        self._snapshot = None

    def rollback(self) -> None:
        snapshot, self._snapshot = self._snapshot, None
        if snapshot is None:
            return
        for path, content in snapshot.items():
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as exc:
                raise RollbackFailedError(
                    f"Rollback failed, {path.name} may be inconsistent: {exc}"
                ) from exc
        logger.warning("Rolled back %s", ", ".join(p.name for p in snapshot))
