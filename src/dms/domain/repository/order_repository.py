"""Abstract repository for SalesOrder."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.order import SalesOrder


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> SalesOrder | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: SalesOrder) -> None:
        """Persist a new or updated order."""
