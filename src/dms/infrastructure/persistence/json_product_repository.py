"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from dms.domain.model.product import Product, ProductType
from dms.domain.repository.product_repository import ProductRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(JsonFile, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def find_by_names(self, names: list[str]) -> dict[str, Product]:
        by_name = {p.name.lower(): p for p in self.list_all()}
        return {n: by_name[n.lower()] for n in names if n.lower() in by_name}

    def list_all(self) -> list[Product]:
        return [
            Product(
                name=raw["name"],
                category=raw.get("category"),
                product_type=ProductType(raw.get("product_type", "physical")),
            )
            for raw in self._load_raw()
        ]

    def save(self, product: Product) -> None:
        records = [
            raw for raw in self._load_raw()
            if raw["name"].lower() != product.name.lower()
        ]
        records.append(
            {
                "name": product.name,
                "category": product.category,
                "product_type": product.product_type.value,
            }
        )
        self._persist_raw(records)
