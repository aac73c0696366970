"""StockItem aggregate — one serial-numbered physical unit in the ledger.

Each unit is either on the shelf (``In Stock``) or assigned to a sales
order (``Dispatched``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from dms.domain.exceptions import ValidationError


class StockStatus(Enum):
    IN_STOCK = "In Stock"
    DISPATCHED = "Dispatched"


@dataclass
class StockItem:
    """Aggregate root for a single unit of stock.

    Invariants:
    - a ``DISPATCHED`` item always carries an ``order_id``
    - an ``IN_STOCK`` item carries no order or customer assignment
    """

    serial_number: str
    product_name: str
    category: str | None = None
    status: StockStatus = StockStatus.IN_STOCK
    order_id: str | None = None
    customer_code: str | None = None
    customer_name: str | None = None
    dispatch_date: date | None = None

    def __post_init__(self) -> None:
        if self.status == StockStatus.DISPATCHED and not self.order_id:
            raise ValidationError(
                f"Dispatched item {self.serial_number} must reference an order"
            )

    @property
    def is_available(self) -> bool:
        return self.status == StockStatus.IN_STOCK

    def dispatch(
        self,
        order_id: str,
        dispatch_date: date,
        customer_code: str | None = None,
        customer_name: str | None = None,
    ) -> None:
        """Assign this unit to an order.

        Only units still on the shelf can be dispatched.
        """
        if not order_id:
            raise ValidationError("Dispatch requires an order ID")
        if self.status != StockStatus.IN_STOCK:
            raise ValidationError(
                f"Device {self.serial_number} is already dispatched"
            )
        self.status = StockStatus.DISPATCHED
        self.order_id = order_id
        self.customer_code = customer_code
        self.customer_name = customer_name
        self.dispatch_date = dispatch_date

    def return_to_stock(self) -> None:
        """Undo a dispatch, clearing every order and customer field."""
        if self.status != StockStatus.DISPATCHED:
            raise ValidationError(
                f"Device {self.serial_number} is not dispatched"
            )
        self.status = StockStatus.IN_STOCK
        self.order_id = None
        self.customer_code = None
        self.customer_name = None
        self.dispatch_date = None
