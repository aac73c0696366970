"""Tests for stock and product intake plus the read-only queries."""

from datetime import date, timedelta

import pytest

from dms.application.add_product import AddProductHandler
from dms.application.add_stock import AddStockHandler
from dms.application.dto import DispatchDetails
from dms.application.open_dispatch import OpenDispatchHandler
from dms.application.show_dispatch_status import ShowDispatchStatusHandler
from dms.application.show_renewals import ShowRenewalsHandler
from dms.application.show_stock import ShowStockHandler
from dms.domain.exceptions import EntityNotFoundError, ValidationError
from dms.domain.model.product import ProductType
from dms.domain.model.stock_item import StockStatus
from dms.domain.service.requirement_resolver import OrderRequirementResolver
from tests.scenario import Backend


class TestAddStock:

    def test_category_follows_catalog(self):
        backend = Backend()
        handler = AddStockHandler(backend.stock, backend.products)

        item = handler.handle(" CAM-7 ", "camera x")

        assert item.serial_number == "CAM-7"
        assert item.product_name == "Camera X"
        assert item.category == "Cameras"
        assert backend.stock.get_by_serial("CAM-7").status == StockStatus.IN_STOCK

    def test_unknown_product_has_no_category(self):
        backend = Backend()
        item = AddStockHandler(backend.stock, backend.products).handle("DR-1", "Drone")
        assert item.category is None

    def test_duplicate_serial(self):
        backend = Backend()
        with pytest.raises(ValidationError, match="already exists"):
            AddStockHandler(backend.stock, backend.products).handle("CAM-1", "Camera X")

    @pytest.mark.parametrize("serial,product", [("", "Camera X"), ("CAM-8", "  ")])
    def test_required_fields(self, serial, product):
        backend = Backend()
        with pytest.raises(ValidationError, match="is required"):
            AddStockHandler(backend.stock, backend.products).handle(serial, product)


class TestAddProduct:

    def test_add_service_product(self):
        backend = Backend()
        product = AddProductHandler(backend.products).handle(
            "Server Charges", None, "Service"
        )
        assert product.product_type == ProductType.SERVICE
        assert product.category is None
        assert backend.products.get_by_name("server charges") is product

    def test_duplicate_name(self):
        backend = Backend()
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(backend.products).handle("camera x", "Cameras")

    def test_bad_type(self):
        backend = Backend()
        with pytest.raises(ValidationError, match="physical' or 'service"):
            AddProductHandler(backend.products).handle("Drone", "Drones", "virtual")


class TestQueries:

    def _status_handler(self, backend):
        resolver = OrderRequirementResolver(backend.products, backend.stock, backend.shipments)
        return ShowDispatchStatusHandler(OpenDispatchHandler(backend.orders, resolver))

    def test_dispatch_status(self):
        backend = Backend()

        lines = self._status_handler(backend).handle("ORD-MIX")

        camera, sim = lines
        assert (camera.product_name, camera.category, camera.required) == (
            "Camera X", "Cameras", 2,
        )
        assert camera.scanned == 0
        assert sim.is_service
        assert sim.scanned == sim.required == 1

    def test_dispatch_status_unknown_order(self):
        backend = Backend()
        with pytest.raises(EntityNotFoundError, match="Order ORD-404 not found"):
            self._status_handler(backend).handle("ORD-404")

    def test_renewals_with_derived_status(self):
        backend = Backend()
        dispatched_on = date(2026, 1, 1)
        backend.finalizer().handle(
            backend.open("ORD-SVC"), DispatchDetails(dispatch_date=dispatched_on)
        )

        handler = ShowRenewalsHandler(backend.renewals)
        [fresh] = handler.handle(today=dispatched_on)
        [late] = handler.handle(today=dispatched_on + timedelta(days=340))
        [gone] = handler.handle(today=dispatched_on + timedelta(days=364))

        assert fresh.status == "Active"
        assert fresh.days_remaining == 364
        assert fresh.product_type == "Cloud Charges"
        assert late.status == "Expiring Soon"
        assert gone.status == "Expired"

    def test_stock_summary(self):
        backend = Backend()
        backend.stock.mark_dispatched(
            ["CAM-1"], "ORD-BULK", dispatch_date=date(2026, 2, 1),
            customer_code=None, customer_name="Metro Security",
        )

        rows = ShowStockHandler(backend.stock).handle()

        assert [(r.product_name, r.in_stock, r.dispatched) for r in rows] == [
            ("Camera X", 2, 1),
            ("Tablet", 1, 0),
        ]
