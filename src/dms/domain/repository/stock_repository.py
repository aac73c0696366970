"""Abstract repository for the serial-number stock ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from dms.domain.model.stock_item import StockItem, StockStatus


class StockRepository(ABC):

    @abstractmethod
    def get_by_serial(self, serial_number: str) -> StockItem | None:
        """Return the unit with this serial, or None."""

    @abstractmethod
    def list_available(self, product_name: str, limit: int) -> list[StockItem]:
        """Return up to ``limit`` In Stock units of a product."""

    @abstractmethod
    def list_by_order(
        self, order_id: str, status: StockStatus | None = None
    ) -> list[StockItem]:
        """Return units assigned to an order, optionally filtered by status."""

    @abstractmethod
    def list_all(self) -> list[StockItem]:
        """Return every unit in the ledger."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated unit."""

    @abstractmethod
    def mark_dispatched(
        self,
        serial_numbers: list[str],
        order_id: str,
        dispatch_date: date,
        customer_code: str | None,
        customer_name: str | None,
    ) -> list[StockItem]:
        """Dispatch units, but only those still In Stock.

        All-or-nothing: if any serial is missing or no longer In Stock,
        raise ConcurrencyConflictError and write nothing.
        """
