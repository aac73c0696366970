"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from dms.domain.model.scan_session import ScanSession


@dataclass(frozen=True)
class DispatchDetails:
    """Input: what the operator entered on the confirmation step."""

    dispatch_date: date
    courier_partner: str | None = None
    shipping_mode: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ScanOutcome:
    session: ScanSession
    message: str


@dataclass(frozen=True)
class BulkAllocation:
    session: ScanSession
    added: int
    message: str


@dataclass(frozen=True)
class RequirementLineDTO:
    """Output: one line of the dispatch checklist."""

    product_name: str
    category: str  # "Uncategorized" when unknown
    is_service: bool
    ordered: int
    already_dispatched: int
    required: int
    scanned: int
    scanned_serials: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DispatchResult:
    order_id: str
    shipment_id: int
    shipment_type: str
    serial_numbers: list[str]
    services_activated: int
    renewals_created: int
    is_complete: bool
    remaining: int
    message: str


@dataclass(frozen=True)
class ReversalResult:
    order_id: str
    items_returned: int
    shipments_deleted: int
    renewals_retained: int
    message: str


@dataclass(frozen=True)
class RenewalDTO:
    order_id: str
    customer_name: str | None
    product_type: str
    product_name: str | None
    renewal_start_date: str
    renewal_end_date: str
    days_remaining: int
    status: str


def describe_session(session: ScanSession) -> list[RequirementLineDTO]:
    return [
        RequirementLineDTO(
            product_name=line.product_name,
            category=line.category or "Uncategorized",
            is_service=line.is_service,
            ordered=line.ordered_qty,
            already_dispatched=line.already_dispatched,
            required=line.required_qty,
            scanned=line.scanned_qty,
            scanned_serials=list(line.scanned_serials),
        )
        for line in session.lines
    ]


@dataclass(frozen=True)
class DispatchedDeviceDTO:
    serial_number: str
    product_name: str
    category: str  # "Uncategorized" when unknown
    dispatch_date: str | None


@dataclass(frozen=True)
class ShipmentDTO:
    id: int
    shipment_type: str
    courier_partner: str | None
    shipping_mode: str | None
    tracking_id: str | None
    weight_kg: str | None
    shipping_cost: str | None
    notes: str | None
    created_at: str


@dataclass(frozen=True)
class DispatchHistoryDTO:
    """Output: everything already dispatched for one order."""

    order_id: str
    customer_name: str | None
    total_items: int
    remaining: int
    devices: list[DispatchedDeviceDTO] = field(default_factory=list)
    shipments: list[ShipmentDTO] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.remaining == 0 and self.total_items > 0
