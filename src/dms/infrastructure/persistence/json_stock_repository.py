"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

from datetime import date

from dms.domain.exceptions import ConcurrencyConflictError
from dms.domain.model.stock_item import StockItem, StockStatus
from dms.domain.repository.stock_repository import StockRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonStockRepository(JsonFile, StockRepository):

    # --- StockRepository interface --------------------------------------------

    def get_by_serial(self, serial_number: str) -> StockItem | None:
        for raw in self._load_raw():
            if raw["serial_number"] == serial_number:
                return self._to_domain(raw)
        return None

    def list_available(self, product_name: str, limit: int) -> list[StockItem]:
        if limit <= 0:
            return []
        wanted = product_name.lower()
        result: list[StockItem] = []
        for raw in self._load_raw():
            if (
                raw["product_name"].lower() == wanted
                and raw["status"] == StockStatus.IN_STOCK.value
            ):
                result.append(self._to_domain(raw))
                if len(result) == limit:
                    break
        return result

    def list_by_order(
        self, order_id: str, status: StockStatus | None = None
    ) -> list[StockItem]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw.get("order_id") == order_id
            and (status is None or raw["status"] == status.value)
        ]

    def list_all(self) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, item: StockItem) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["serial_number"] == item.serial_number:
                records[i] = self._to_raw(item)
                break
        else:
            records.append(self._to_raw(item))
        self._persist_raw(records)

    def mark_dispatched(
        self,
        serial_numbers: list[str],
        order_id: str,
        dispatch_date: date,
        customer_code: str | None,
        customer_name: str | None,
    ) -> list[StockItem]:
        records = self._load_raw()
        index = {raw["serial_number"]: i for i, raw in enumerate(records)}

        # Check every row first so a conflict leaves the file untouched
        conflicts = [
            s
            for s in serial_numbers
            if s not in index
            or records[index[s]]["status"] != StockStatus.IN_STOCK.value
        ]
        if conflicts:
            raise ConcurrencyConflictError(
                f"Device(s) no longer in stock: {', '.join(conflicts)}", conflicts
            )

        updated: list[StockItem] = []
        for serial in serial_numbers:
            item = self._to_domain(records[index[serial]])
            item.dispatch(order_id, dispatch_date, customer_code, customer_name)
            records[index[serial]] = self._to_raw(item)
            updated.append(item)
        self._persist_raw(records)
        return updated

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "serial_number": item.serial_number,
            "product_name": item.product_name,
            "category": item.category,
            "status": item.status.value,
            "order_id": item.order_id,
            "customer_code": item.customer_code,
            "customer_name": item.customer_name,
            "dispatch_date": item.dispatch_date.isoformat() if item.dispatch_date else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        dispatch_date = raw.get("dispatch_date")
        return StockItem(
            serial_number=raw["serial_number"],
            product_name=raw["product_name"],
            category=raw.get("category"),
            status=StockStatus(raw.get("status", StockStatus.IN_STOCK.value)),
            order_id=raw.get("order_id"),
            customer_code=raw.get("customer_code"),
            customer_name=raw.get("customer_name"),
            dispatch_date=date.fromisoformat(dispatch_date) if dispatch_date else None,
        )
