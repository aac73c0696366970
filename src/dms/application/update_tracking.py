"""Application service: Update Tracking use case."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from dms.domain.exceptions import EntityNotFoundError, ValidationError
from dms.domain.model.shipment import Shipment
from dms.domain.model.value_objects import Money
from dms.domain.repository.shipment_repository import ShipmentRepository


class UpdateTrackingHandler:

    def __init__(self, shipment_repo: ShipmentRepository) -> None:
        self._shipment_repo = shipment_repo

    def handle(
        self,
        shipment_id: int,
        courier_partner: str,
        shipping_mode: str,
        tracking_id: str,
        weight_kg: str | None = None,
        shipping_cost: str | None = None,
    ) -> Shipment:
        """Attach courier tracking details to an existing shipment."""
        shipment = self._shipment_repo.get_by_id(shipment_id)
        if shipment is None:
            raise EntityNotFoundError(f"Shipment #{shipment_id} not found")

        shipment.update_tracking(
            courier_partner,
            shipping_mode,
            tracking_id,
            weight_kg=_parse_weight(weight_kg),
            shipping_cost=Money.of(shipping_cost) if shipping_cost else None,
        )
        self._shipment_repo.save(shipment)
        return shipment


def _parse_weight(value: str | None) -> Decimal | None:
    if not value:
        return None
    try:
        weight = Decimal(value)
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid weight: {value!r}") from exc
    if not weight.is_finite():
        raise ValidationError(f"Invalid weight: {value!r}")
    return weight
