"""Product catalog entry and service classification.

Whether a product needs serial allocation or starts a renewal cycle is
decided here and nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dms.domain.exceptions import ValidationError


class ProductType(Enum):
    PHYSICAL = "physical"
    SERVICE = "service"


class ServiceType(Enum):
    """Taxonomy of recurring services tracked by renewals."""

    SERVER_CHARGES = "Server Charges"
    CLOUD_CHARGES = "Cloud Charges"
    SIM_CHARGES = "SIM Charges"

    @staticmethod
    def for_product(product_name: str) -> ServiceType:
        name = product_name.lower()
        if "server" in name:
            return ServiceType.SERVER_CHARGES
        if "cloud" in name:
            return ServiceType.CLOUD_CHARGES
        return ServiceType.SIM_CHARGES


# Used only when the catalog has nothing to say about a product.
KNOWN_SERVICE_NAMES = tuple(s.value.lower() for s in ServiceType)

DIGITAL_SERVICE_CATEGORY = "Digital Service"


@dataclass
class Product:
    """A product in the catalog."""

    name: str
    category: str | None = None
    product_type: ProductType = ProductType.PHYSICAL

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")

    @property
    def is_service(self) -> bool:
        return self.product_type == ProductType.SERVICE


def is_service_product(product_name: str, catalog_entry: Product | None) -> bool:
    """Classify an order line as service (no serials) or physical.

    The catalog's ``product_type`` is authoritative.  Products missing
    from the catalog fall back to a case-insensitive substring match on
    the known service names.
    """
    if catalog_entry is not None:
        return catalog_entry.is_service
    name = product_name.lower()
    return any(known in name for known in KNOWN_SERVICE_NAMES)
