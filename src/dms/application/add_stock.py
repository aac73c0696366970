"""Application service: Add Stock use case (inventory intake)."""

from __future__ import annotations

from dms.domain.exceptions import ValidationError
from dms.domain.model.stock_item import StockItem
from dms.domain.repository.product_repository import ProductRepository
from dms.domain.repository.stock_repository import StockRepository


class AddStockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._stock_repo = stock_repo
        self._product_repo = product_repo

    def handle(self, serial_number: str, product_name: str) -> StockItem:
        """Put a new serial-numbered unit on the shelf."""
        serial = serial_number.strip()
        if not serial:
            raise ValidationError("Serial number is required")
        if not product_name or not product_name.strip():
            raise ValidationError("Product name is required")

        if self._stock_repo.get_by_serial(serial) is not None:
            raise ValidationError(f"Serial '{serial}' already exists in inventory")

        # Category follows the catalog when the product is known
        product = self._product_repo.get_by_name(product_name.strip())
        item = StockItem(
            serial_number=serial,
            product_name=product.name if product else product_name.strip(),
            category=product.category if product else None,
        )
        self._stock_repo.save(item)
        return item
