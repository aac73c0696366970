"""Application service: Delete Dispatch use case.

Reverses every dispatch of an order: dispatched units go back on the
shelf and the order's shipment records are deleted.  Administrators only.

Renewals opened by the dispatch are NOT touched.  A reversed order can
therefore keep an Active renewal; the count is reported and logged so
the renewal desk can follow up.
"""

from __future__ import annotations

import logging

from dms.application.dto import ReversalResult
from dms.domain.exceptions import EntityNotFoundError, PermissionDeniedError
from dms.domain.model.role import Role
from dms.domain.model.stock_item import StockStatus
from dms.domain.repository.renewal_repository import RenewalRepository
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.domain.repository.stock_repository import StockRepository
from dms.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteDispatchHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        shipment_repo: ShipmentRepository,
        renewal_repo: RenewalRepository,
        uow: UnitOfWork,
    ) -> None:
        self._stock_repo = stock_repo
        self._shipment_repo = shipment_repo
        self._renewal_repo = renewal_repo
        self._uow = uow

    def handle(self, order_id: str, role: Role) -> ReversalResult:
        if not role.is_admin:
            raise PermissionDeniedError("Only administrators can delete a dispatch")

        items = self._stock_repo.list_by_order(order_id, StockStatus.DISPATCHED)
        shipments = self._shipment_repo.list_by_order(order_id)
        if not items and not shipments:
            raise EntityNotFoundError(f"No dispatch found for order {order_id}")

        with self._uow:
            for item in items:
                item.return_to_stock()
                self._stock_repo.save(item)
            deleted = self._shipment_repo.delete_for_order(order_id)

        retained = len(self._renewal_repo.list_by_order(order_id))
        if retained:
            logger.warning(
                "Order %s reversed but %d renewal record(s) remain active",
                order_id,
                retained,
            )
        logger.info(
            "Order %s: returned %d item(s) to stock, deleted %d shipment(s)",
            order_id,
            len(items),
            deleted,
        )
        return ReversalResult(
            order_id=order_id,
            items_returned=len(items),
            shipments_deleted=deleted,
            renewals_retained=retained,
            message=(
                "Dispatch deleted. Stock restored to inventory. "
                f"{len(items)} device(s) returned to stock"
            ),
        )
