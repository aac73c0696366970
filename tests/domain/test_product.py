"""Unit tests for catalog entries and service classification."""

import pytest

from dms.domain.exceptions import ValidationError
from dms.domain.model.product import (
    Product,
    ProductType,
    ServiceType,
    is_service_product,
)


class TestServiceClassification:

    def test_catalog_type_is_authoritative(self):
        entry = Product(name="Cloud Charges", product_type=ProductType.PHYSICAL)
        assert is_service_product("Cloud Charges", entry) is False

    def test_catalog_service_type_without_known_name(self):
        entry = Product(name="Fleet Portal Access", product_type=ProductType.SERVICE)
        assert is_service_product("Fleet Portal Access", entry) is True

    @pytest.mark.parametrize(
        "name", ["Cloud Charges", "SIM CHARGES - 1 year", "server charges (annual)"]
    )
    def test_known_names_match_without_catalog(self, name):
        assert is_service_product(name, None) is True

    def test_physical_name_without_catalog(self):
        assert is_service_product("Camera X", None) is False


class TestServiceType:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Server Charges", ServiceType.SERVER_CHARGES),
            ("Cloud Storage Charges", ServiceType.CLOUD_CHARGES),
            ("SIM Charges", ServiceType.SIM_CHARGES),
            ("Data Plan", ServiceType.SIM_CHARGES),
        ],
    )
    def test_for_product(self, name, expected):
        assert ServiceType.for_product(name) == expected


class TestProduct:

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product(name="  ")

    def test_defaults_to_physical(self):
        assert Product(name="Camera X").is_service is False
