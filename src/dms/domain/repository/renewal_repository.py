"""Abstract repository for Renewal records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.renewal import Renewal


class RenewalRepository(ABC):

    @abstractmethod
    def add_all(self, renewals: list[Renewal]) -> list[Renewal]:
        """Insert renewals in one call, assigning their IDs."""

    @abstractmethod
    def list_by_order(self, order_id: str) -> list[Renewal]:
        """Return renewals created for an order."""

    @abstractmethod
    def list_all(self) -> list[Renewal]:
        """Return every renewal, soonest expiry first."""
