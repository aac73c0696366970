"""Abstract unit of work.

Writes made inside ``with uow:`` are kept when the block exits normally
and undone when it raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType


class UnitOfWork(ABC):

    def __enter__(self) -> UnitOfWork:
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def begin(self) -> None:
        """Start tracking writes."""

    @abstractmethod
    def commit(self) -> None:
        """Keep every write made since ``begin``."""

    @abstractmethod
    def rollback(self) -> None:
        """Undo every write made since ``begin``.

        Raises ``RollbackFailedError`` when the undo cannot be completed.
        """
