"""Application service: Bulk Allocate use case.

Fills the rest of a product's requirement straight from available
stock instead of scanning unit by unit.
"""

from __future__ import annotations

import logging

from dms.application.dto import BulkAllocation
from dms.domain.exceptions import ScanRejectedError, ScanRejection
from dms.domain.model.scan_session import ScanSession
from dms.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class BulkAllocateHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, session: ScanSession, product_name: str) -> BulkAllocation:
        """Allocate up to the remaining quantity of ``product_name``.

        The ledger query is capped at what the order still needs, so the
        requirement can never be exceeded.  Units already in the session
        are skipped.
        """
        remaining = session.spare_capacity_for(product_name)
        if remaining <= 0:
            return BulkAllocation(
                session=session,
                added=0,
                message=f"Nothing left to allocate for {product_name}",
            )

        candidates = self._stock_repo.list_available(product_name, limit=remaining)
        if not candidates:
            raise ScanRejectedError(
                ScanRejection.NO_AVAILABLE_STOCK,
                "No available stock for this product",
            )

        fresh = [
            item for item in candidates if not session.has_serial(item.serial_number)
        ]
        if not fresh:
            raise ScanRejectedError(
                ScanRejection.ALL_AVAILABLE_SCANNED,
                "All available items already scanned",
            )

        updated = session
        for item in fresh:
            updated = updated.admit(item)

        logger.info(
            "Order %s: bulk-allocated %d x %s",
            session.order_id,
            len(fresh),
            product_name,
        )
        return BulkAllocation(
            session=updated,
            added=len(fresh),
            message=f"Added {len(fresh)} {product_name} items",
        )
