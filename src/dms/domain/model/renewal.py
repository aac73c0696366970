"""Renewal — tracks the yearly validity window of a dispatched service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from dms.domain.model.product import ServiceType

RENEWAL_CYCLE_DAYS = 364
EXPIRING_SOON_DAYS = 30


class RenewalStatus(Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


@dataclass
class Renewal:
    id: int | None
    order_id: str
    product_type: ServiceType
    product_name: str | None
    dispatch_date: date
    renewal_start_date: date
    renewal_end_date: date
    status: RenewalStatus = RenewalStatus.ACTIVE
    customer_code: str | None = None
    customer_name: str | None = None
    company_name: str | None = None

    @staticmethod
    def start_cycle(
        order_id: str,
        product_name: str,
        dispatch_date: date,
        customer_code: str | None = None,
        customer_name: str | None = None,
        company_name: str | None = None,
    ) -> Renewal:
        """Open a new cycle that starts on the dispatch date."""
        return Renewal(
            id=None,
            order_id=order_id,
            product_type=ServiceType.for_product(product_name),
            product_name=product_name,
            dispatch_date=dispatch_date,
            renewal_start_date=dispatch_date,
            renewal_end_date=dispatch_date + timedelta(days=RENEWAL_CYCLE_DAYS),
            customer_code=customer_code,
            customer_name=customer_name,
            company_name=company_name,
        )

    def days_remaining(self, today: date) -> int:
        return (self.renewal_end_date - today).days

    def status_on(self, today: date) -> RenewalStatus:
        """Status as shown to operators; the stored status is not changed."""
        days = self.days_remaining(today)
        if days <= 0:
            return RenewalStatus.EXPIRED
        if days <= EXPIRING_SOON_DAYS:
            return RenewalStatus.EXPIRING_SOON
        return RenewalStatus.ACTIVE
