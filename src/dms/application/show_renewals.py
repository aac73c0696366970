"""Application service: Show Renewals use case (query)."""

from __future__ import annotations

from datetime import date

from dms.application.dto import RenewalDTO
from dms.domain.repository.renewal_repository import RenewalRepository


class ShowRenewalsHandler:

    def __init__(self, renewal_repo: RenewalRepository) -> None:
        self._renewal_repo = renewal_repo

    def handle(self, today: date | None = None) -> list[RenewalDTO]:
        """List renewals with their status as of ``today``."""
        today = today or date.today()
        return [
            RenewalDTO(
                order_id=r.order_id,
                customer_name=r.customer_name,
                product_type=r.product_type.value,
                product_name=r.product_name,
                renewal_start_date=r.renewal_start_date.isoformat(),
                renewal_end_date=r.renewal_end_date.isoformat(),
                days_remaining=r.days_remaining(today),
                status=r.status_on(today).value,
            )
            for r in self._renewal_repo.list_all()
        ]
