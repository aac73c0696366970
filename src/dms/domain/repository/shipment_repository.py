"""Abstract repository for Shipment records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.shipment import Shipment


class ShipmentRepository(ABC):

    @abstractmethod
    def add(self, shipment: Shipment) -> Shipment:
        """Insert a shipment, assigning its ID."""

    @abstractmethod
    def get_by_id(self, shipment_id: int) -> Shipment | None:
        """Return a shipment by ID, or None if not found."""

    @abstractmethod
    def save(self, shipment: Shipment) -> None:
        """Overwrite an existing shipment."""

    @abstractmethod
    def list_by_order(self, order_id: str) -> list[Shipment]:
        """Return every shipment recorded for an order."""

    @abstractmethod
    def delete_for_order(self, order_id: str) -> int:
        """Delete every shipment of an order and return how many were removed."""
