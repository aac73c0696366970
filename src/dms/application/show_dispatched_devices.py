"""Application service: Show Dispatched Devices use case (query).

Lists what has already left the shelf for an order, oldest dispatch
first, together with its shipment records.
"""

from __future__ import annotations

from dms.application.dto import DispatchedDeviceDTO, DispatchHistoryDTO, ShipmentDTO
from dms.application.open_dispatch import OpenDispatchHandler
from dms.domain.model.shipment import Shipment
from dms.domain.model.stock_item import StockStatus
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.domain.repository.stock_repository import StockRepository


class ShowDispatchedDevicesHandler:

    def __init__(
        self,
        open_handler: OpenDispatchHandler,
        stock_repo: StockRepository,
        shipment_repo: ShipmentRepository,
    ) -> None:
        self._open_handler = open_handler
        self._stock_repo = stock_repo
        self._shipment_repo = shipment_repo

    def handle(self, order_id: str) -> DispatchHistoryDTO:
        session = self._open_handler.handle(order_id)
        items = sorted(
            self._stock_repo.list_by_order(order_id, StockStatus.DISPATCHED),
            key=lambda i: (i.dispatch_date is None, i.dispatch_date, i.serial_number),
        )
        shipments = sorted(
            self._shipment_repo.list_by_order(order_id), key=lambda s: s.created_at
        )
        return DispatchHistoryDTO(
            order_id=order_id,
            customer_name=session.order.customer_name,
            total_items=session.order.total_units,
            remaining=sum(line.required_qty for line in session.lines),
            devices=[
                DispatchedDeviceDTO(
                    serial_number=i.serial_number,
                    product_name=i.product_name,
                    category=i.category or "Uncategorized",
                    dispatch_date=i.dispatch_date.isoformat() if i.dispatch_date else None,
                )
                for i in items
            ],
            shipments=[_to_dto(s) for s in shipments],
        )


def _to_dto(shipment: Shipment) -> ShipmentDTO:
    return ShipmentDTO(
        id=shipment.id,  # type: ignore[arg-type]
        shipment_type=shipment.shipment_type.value,
        courier_partner=shipment.courier_partner,
        shipping_mode=shipment.shipping_mode,
        tracking_id=shipment.tracking_id,
        weight_kg=str(shipment.weight_kg) if shipment.weight_kg is not None else None,
        shipping_cost=str(shipment.shipping_cost) if shipment.shipping_cost else None,
        notes=shipment.notes,
        created_at=shipment.created_at.isoformat(),
    )
