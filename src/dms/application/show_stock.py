"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from dms.domain.model.stock_item import StockStatus
from dms.domain.repository.stock_repository import StockRepository


@dataclass(frozen=True)
class StockLineDTO:
    product_name: str
    in_stock: int
    dispatched: int


class ShowStockHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self) -> list[StockLineDTO]:
        counts: dict[str, list[int]] = {}
        for item in self._stock_repo.list_all():
            row = counts.setdefault(item.product_name, [0, 0])
            if item.status == StockStatus.IN_STOCK:
                row[0] += 1
            else:
                row[1] += 1
        return [
            StockLineDTO(product_name=name, in_stock=row[0], dispatched=row[1])
            for name, row in sorted(counts.items())
        ]
