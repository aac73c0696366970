"""Shipment — one record per confirmed dispatch action (not per unit)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from dms.domain.exceptions import ValidationError
from dms.domain.model.value_objects import Money


class ShipmentType(Enum):
    OUTBOUND = "Outbound"
    SERVICE_ACTIVATION = "Service Activation"


# Placeholder courier details for dispatches that ship nothing physical.
DIGITAL_COURIER_PARTNER = "N/A"
DIGITAL_SHIPPING_MODE = "Digital"


@dataclass
class Shipment:
    id: int | None
    order_id: str
    shipment_type: ShipmentType
    courier_partner: str | None = None
    shipping_mode: str | None = None
    shipping_cost: Money | None = None
    tracking_id: str | None = None
    weight_kg: Decimal | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def service_activation(order_id: str, notes: str | None = None) -> Shipment:
        return Shipment(
            id=None,
            order_id=order_id,
            shipment_type=ShipmentType.SERVICE_ACTIVATION,
            courier_partner=DIGITAL_COURIER_PARTNER,
            shipping_mode=DIGITAL_SHIPPING_MODE,
            shipping_cost=Money.zero(),
            notes=notes or None,
        )

    @staticmethod
    def outbound(
        order_id: str,
        courier_partner: str | None,
        shipping_mode: str | None,
        shipping_cost: Money | None,
        notes: str | None = None,
    ) -> Shipment:
        return Shipment(
            id=None,
            order_id=order_id,
            shipment_type=ShipmentType.OUTBOUND,
            courier_partner=courier_partner or None,
            shipping_mode=shipping_mode or None,
            shipping_cost=shipping_cost,
            notes=notes or None,
        )

    def update_tracking(
        self,
        courier_partner: str,
        shipping_mode: str,
        tracking_id: str,
        weight_kg: Decimal | None = None,
        shipping_cost: Money | None = None,
    ) -> None:
        """Record the courier's consignment details once it is booked.

        Weight and cost are optional; when omitted the stored values stay.
        """
        if self.shipment_type == ShipmentType.SERVICE_ACTIVATION:
            raise ValidationError(
                f"Shipment #{self.id} is a service activation and has no courier"
            )
        if not courier_partner or not courier_partner.strip():
            raise ValidationError("Please select a courier partner")
        if not shipping_mode or not shipping_mode.strip():
            raise ValidationError("Please select a courier mode")
        if not tracking_id or not tracking_id.strip():
            raise ValidationError("Please enter a tracking ID")
        if weight_kg is not None and weight_kg <= 0:
            raise ValidationError(f"Weight must be positive, got {weight_kg}")

        self.courier_partner = courier_partner.strip()
        self.shipping_mode = shipping_mode.strip()
        self.tracking_id = tracking_id.strip()
        if weight_kg is not None:
            self.weight_kg = weight_kg
        if shipping_cost is not None:
            self.shipping_cost = shipping_cost
