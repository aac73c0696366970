"""Application service: Add Product use case."""

from __future__ import annotations

from dms.domain.exceptions import ValidationError
from dms.domain.model.product import Product, ProductType
from dms.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, name: str, category: str | None, product_type: str = "physical"
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        try:
            kind = ProductType(product_type.strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Product type must be 'physical' or 'service', got {product_type!r}"
            ) from exc

        product = Product(
            name=name.strip(),
            category=(category or "").strip() or None,
            product_type=kind,
        )
        self._product_repo.save(product)
        return product
