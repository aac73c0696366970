"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None if not found."""

    @abstractmethod
    def find_by_names(self, names: list[str]) -> dict[str, Product]:
        """Return the catalog entries for ``names``, keyed by the requested name."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
