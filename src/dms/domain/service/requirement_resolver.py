"""Domain service: Order Requirement Resolver.

Turns a sales order into the requirement lines a dispatch has to cover.
It reads three stores (catalog, stock ledger, shipments) but never
writes to any of them.

Physical lines subtract units already dispatched against the order, so
an order can be shipped over several dispatches.  Service lines count as
activated as soon as the order has any shipment.
"""

from __future__ import annotations

import logging
from collections import Counter

from dms.domain.exceptions import PersistenceError
from dms.domain.model.order import SalesOrder
from dms.domain.model.product import (
    DIGITAL_SERVICE_CATEGORY,
    Product,
    is_service_product,
)
from dms.domain.model.requirement import RequirementLine
from dms.domain.model.stock_item import StockStatus
from dms.domain.repository.product_repository import ProductRepository
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class OrderRequirementResolver:

    def __init__(
        self,
        product_repo: ProductRepository,
        stock_repo: StockRepository,
        shipment_repo: ShipmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._stock_repo = stock_repo
        self._shipment_repo = shipment_repo

    def resolve(self, order: SalesOrder) -> list[RequirementLine]:
        """Build one requirement line per order line, in order."""
        catalog = self._load_catalog(order)

        dispatched = Counter(
            item.product_name.lower()
            for item in self._stock_repo.list_by_order(
                order.order_id, StockStatus.DISPATCHED
            )
        )
        service_activated = bool(self._shipment_repo.list_by_order(order.order_id))

        lines: list[RequirementLine] = []
        for order_line in order.lines:
            name = order_line.product_name
            entry = catalog.get(name) if catalog is not None else None
            is_service = is_service_product(name, entry)
            ordered = order_line.quantity.value

            if is_service:
                already = ordered if service_activated else 0
            else:
                # Dispatched units are credited to duplicate lines in line order
                already = min(dispatched[name.lower()], ordered)
                dispatched[name.lower()] -= already

            lines.append(
                RequirementLine(
                    product_name=name,
                    ordered_qty=ordered,
                    already_dispatched=already,
                    is_service=is_service,
                    category=self._category(entry, is_service, catalog is not None),
                )
            )
        return lines

    # --- Internal helpers -----------------------------------------------------

    def _load_catalog(self, order: SalesOrder) -> dict[str, Product] | None:
        names = [line.product_name for line in order.lines]
        try:
            return self._product_repo.find_by_names(names)
        except PersistenceError as exc:
            logger.warning(
                "Catalog lookup failed for order %s, continuing without "
                "categories: %s",
                order.order_id,
                exc,
            )
            return None

    @staticmethod
    def _category(
        entry: Product | None, is_service: bool, catalog_loaded: bool
    ) -> str | None:
        if not catalog_loaded:
            return None
        if entry is not None and entry.category:
            return entry.category
        return DIGITAL_SERVICE_CATEGORY if is_service else None
