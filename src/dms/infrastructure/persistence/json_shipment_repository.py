"""JSON-file-backed implementation of ShipmentRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from dms.domain.exceptions import EntityNotFoundError
from dms.domain.model.shipment import Shipment, ShipmentType
from dms.domain.model.value_objects import Money
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonShipmentRepository(JsonFile, ShipmentRepository):

    def add(self, shipment: Shipment) -> Shipment:
        records = self._load_raw()
        shipment.id = self._next_id(records)
        records.append(self._to_raw(shipment))
        self._persist_raw(records)
        return shipment

    def get_by_id(self, shipment_id: int) -> Shipment | None:
        for raw in self._load_raw():
            if raw["id"] == shipment_id:
                return self._to_domain(raw)
        return None

    def save(self, shipment: Shipment) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["id"] == shipment.id:
                records[i] = self._to_raw(shipment)
                break
        else:
            raise EntityNotFoundError(f"Shipment #{shipment.id} not found")
        self._persist_raw(records)

    def list_by_order(self, order_id: str) -> list[Shipment]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["order_id"] == order_id
        ]

    def delete_for_order(self, order_id: str) -> int:
        records = self._load_raw()
        kept = [raw for raw in records if raw["order_id"] != order_id]
        self._persist_raw(kept)
        return len(records) - len(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(shipment: Shipment) -> dict:
        return {
            "id": shipment.id,
            "order_id": shipment.order_id,
            "shipment_type": shipment.shipment_type.value,
            "courier_partner": shipment.courier_partner,
            "shipping_mode": shipment.shipping_mode,
            "shipping_cost": (
                str(shipment.shipping_cost.amount) if shipment.shipping_cost else None
            ),
            "tracking_id": shipment.tracking_id,
            "weight_kg": str(shipment.weight_kg) if shipment.weight_kg is not None else None,
            "notes": shipment.notes,
            "created_at": shipment.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Shipment:
        cost = raw.get("shipping_cost")
        weight = raw.get("weight_kg")
        return Shipment(
            id=raw["id"],
            order_id=raw["order_id"],
            shipment_type=ShipmentType(raw["shipment_type"]),
            courier_partner=raw.get("courier_partner"),
            shipping_mode=raw.get("shipping_mode"),
            shipping_cost=Money(Decimal(cost)) if cost is not None else None,
            tracking_id=raw.get("tracking_id"),
            weight_kg=Decimal(weight) if weight is not None else None,
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
