"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from decimal import Decimal

from dms.domain.model.order import OrderLine, SalesOrder
from dms.domain.model.value_objects import Money, Quantity
from dms.domain.repository.order_repository import OrderRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(JsonFile, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> SalesOrder | None:
        for raw in self._load_raw():
            if raw["order_id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: SalesOrder) -> None:
        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["order_id"] == order.order_id:
                orders[i] = self._to_raw(order)
                break
        else:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: SalesOrder) -> dict:
        return {
            "order_id": order.order_id,
            "customer_code": order.customer_code,
            "customer_name": order.customer_name,
            "company_name": order.company_name,
            "courier_cost": (
                str(order.courier_cost.amount) if order.courier_cost else None
            ),
            "items": [
                {
                    "product_name": line.product_name,
                    "quantity": line.quantity.value,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> SalesOrder:
        cost = raw.get("courier_cost")
        return SalesOrder(
            order_id=raw["order_id"],
            customer_code=raw.get("customer_code"),
            customer_name=raw.get("customer_name"),
            company_name=raw.get("company_name"),
            courier_cost=Money(Decimal(str(cost))) if cost is not None else None,
            lines=[
                OrderLine(
                    product_name=i["product_name"],
                    quantity=Quantity(i["quantity"]),
                )
                for i in raw.get("items", [])
            ],
        )
