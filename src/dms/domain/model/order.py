"""SalesOrder — the read-only view of a confirmed sale awaiting dispatch.

Orders are created and priced elsewhere; dispatch only needs the
customer details, the courier cost and the product lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dms.domain.exceptions import ValidationError
from dms.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderLine:
    product_name: str
    quantity: Quantity


@dataclass
class SalesOrder:
    order_id: str
    customer_name: str | None
    lines: list[OrderLine] = field(default_factory=list)
    customer_code: str | None = None
    company_name: str | None = None
    courier_cost: Money | None = None

    def __post_init__(self) -> None:
        if not self.order_id or not self.order_id.strip():
            raise ValidationError("Order ID is required")

    @property
    def total_units(self) -> int:
        return sum(line.quantity.value for line in self.lines)
