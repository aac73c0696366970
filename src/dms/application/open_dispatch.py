"""Application service: Open Dispatch use case.

Loads the order and resolves what this dispatch has to cover.  The
returned session lives only as long as the operator's dialog.
"""

from __future__ import annotations

from dms.domain.exceptions import EntityNotFoundError
from dms.domain.model.scan_session import ScanSession
from dms.domain.repository.order_repository import OrderRepository
from dms.domain.service.requirement_resolver import OrderRequirementResolver


class OpenDispatchHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        resolver: OrderRequirementResolver,
    ) -> None:
        self._order_repo = order_repo
        self._resolver = resolver

    def handle(self, order_id: str) -> ScanSession:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return ScanSession.start(order, self._resolver.resolve(order))
