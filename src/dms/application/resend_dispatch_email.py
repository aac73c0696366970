"""Application service: Resend Dispatch Email use case.

Rebuilds the customer email from what has actually been dispatched for
the order so far and queues it again.
"""

from __future__ import annotations

import logging

from dms.application.open_dispatch import OpenDispatchHandler
from dms.application.ports import DispatchEmail, DispatchMailer
from dms.domain.exceptions import EntityNotFoundError
from dms.domain.model.stock_item import StockStatus
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class ResendDispatchEmailHandler:

    def __init__(
        self,
        open_handler: OpenDispatchHandler,
        stock_repo: StockRepository,
        shipment_repo: ShipmentRepository,
        mailer: DispatchMailer,
    ) -> None:
        self._open_handler = open_handler
        self._stock_repo = stock_repo
        self._shipment_repo = shipment_repo
        self._mailer = mailer

    def handle(self, order_id: str) -> DispatchEmail:
        session = self._open_handler.handle(order_id)
        shipments = self._shipment_repo.list_by_order(order_id)
        if not shipments:
            raise EntityNotFoundError(f"No dispatch found for order {order_id}")

        items = self._stock_repo.list_by_order(order_id, StockStatus.DISPATCHED)
        dates = [i.dispatch_date for i in items if i.dispatch_date is not None]
        if dates:
            last_dispatch = max(dates)
        else:
            last_dispatch = max(s.created_at for s in shipments).date()

        shipped_lines = [line for line in session.lines if line.already_dispatched > 0]
        email = DispatchEmail(
            order_id=order_id,
            dispatch_date=last_dispatch.strftime("%d/%m/%Y"),
            serial_numbers=[i.serial_number for i in items],
            product_name=", ".join(line.product_name for line in shipped_lines),
            total_quantity=sum(line.already_dispatched for line in shipped_lines),
        )
        # Failures propagate to the caller.
        self._mailer.send_dispatch_email(email)
        logger.info("Re-sent dispatch email for order %s", order_id)
        return email
