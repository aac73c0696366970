"""Application service: Scan Serial use case.

Validates one serial (typed, or sent by a barcode scanner as keystrokes
plus Enter) against the ledger and the open session.  Only the session
changes; nothing is written to storage until the dispatch is confirmed.
"""

from __future__ import annotations

import logging

from dms.application.dto import ScanOutcome
from dms.domain.exceptions import ScanRejectedError, ScanRejection
from dms.domain.model.scan_session import ScanSession
from dms.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class ScanSerialHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, session: ScanSession, raw_serial: str | None) -> ScanOutcome:
        """Add a serial to the session.

        Checks, first failure wins: non-empty, not yet scanned, present in
        the ledger, not dispatched, and wanted by a line with room left.
        """
        serial = session.normalize_serial(raw_serial)

        item = self._stock_repo.get_by_serial(serial)
        if item is None:
            raise ScanRejectedError(
                ScanRejection.NOT_FOUND, "Device not found in inventory"
            )

        updated = session.admit(item)
        logger.debug(
            "Order %s: scanned %s (%s)", session.order_id, serial, item.product_name
        )
        return ScanOutcome(session=updated, message=f"Added: {item.product_name}")

    @staticmethod
    def remove(session: ScanSession, serial: str) -> ScanOutcome:
        updated = session.remove(serial)
        return ScanOutcome(session=updated, message=f"Removed: {serial}")
