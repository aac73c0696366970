"""JSON-file-backed implementation of RenewalRepository."""

from __future__ import annotations

from datetime import date

from dms.domain.model.product import ServiceType
from dms.domain.model.renewal import Renewal, RenewalStatus
from dms.domain.repository.renewal_repository import RenewalRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonRenewalRepository(JsonFile, RenewalRepository):

    def add_all(self, renewals: list[Renewal]) -> list[Renewal]:
        records = self._load_raw()
        for renewal in renewals:
            renewal.id = self._next_id(records)
            records.append(self._to_raw(renewal))
        self._persist_raw(records)
        return renewals

    def list_by_order(self, order_id: str) -> list[Renewal]:
        return [r for r in self.list_all() if r.order_id == order_id]

    def list_all(self) -> list[Renewal]:
        renewals = [self._to_domain(raw) for raw in self._load_raw()]
        return sorted(renewals, key=lambda r: r.renewal_end_date)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(renewal: Renewal) -> dict:
        return {
            "id": renewal.id,
            "order_id": renewal.order_id,
            "customer_code": renewal.customer_code,
            "customer_name": renewal.customer_name,
            "company_name": renewal.company_name,
            "product_type": renewal.product_type.value,
            "product_name": renewal.product_name,
            "dispatch_date": renewal.dispatch_date.isoformat(),
            "renewal_start_date": renewal.renewal_start_date.isoformat(),
            "renewal_end_date": renewal.renewal_end_date.isoformat(),
            "status": renewal.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Renewal:
        return Renewal(
            id=raw["id"],
            order_id=raw["order_id"],
            customer_code=raw.get("customer_code"),
            customer_name=raw.get("customer_name"),
            company_name=raw.get("company_name"),
            product_type=ServiceType(raw["product_type"]),
            product_name=raw.get("product_name"),
            dispatch_date=date.fromisoformat(raw["dispatch_date"]),
            renewal_start_date=date.fromisoformat(raw["renewal_start_date"]),
            renewal_end_date=date.fromisoformat(raw["renewal_end_date"]),
            status=RenewalStatus(raw.get("status", RenewalStatus.ACTIVE.value)),
        )
