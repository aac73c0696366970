"""Unit tests for the OrderRequirementResolver domain service."""

import logging
from datetime import date

from dms.domain.model.order import OrderLine, SalesOrder
from dms.domain.model.product import Product, ProductType
from dms.domain.model.shipment import Shipment
from dms.domain.model.stock_item import StockItem
from dms.domain.model.value_objects import Quantity
from dms.domain.service.requirement_resolver import OrderRequirementResolver
from tests.fakes import (
    FakeProductRepository,
    FakeShipmentRepository,
    FakeStockRepository,
)


def _order() -> SalesOrder:
    return SalesOrder(
        order_id="ORD-1",
        customer_name="Acme Traders",
        lines=[
            OrderLine("Camera X", Quantity(3)),
            OrderLine("Cloud Charges", Quantity(2)),
        ],
    )


def _catalog() -> list[Product]:
    return [
        Product(name="Camera X", category="Cameras"),
        Product(name="Cloud Charges", product_type=ProductType.SERVICE),
    ]


class TestResolve:

    def test_classifies_and_enriches_lines(self):
        resolver = OrderRequirementResolver(
            FakeProductRepository(_catalog()),
            FakeStockRepository(),
            FakeShipmentRepository(),
        )
        camera, cloud = resolver.resolve(_order())

        assert not camera.is_service
        assert camera.required_qty == 3
        assert camera.scanned_qty == 0
        assert camera.category == "Cameras"

        assert cloud.is_service
        assert cloud.scanned_qty == 2
        assert cloud.category == "Digital Service"

    def test_unknown_product_falls_back_to_name_rule(self):
        resolver = OrderRequirementResolver(
            FakeProductRepository([]), FakeStockRepository(), FakeShipmentRepository()
        )
        camera, cloud = resolver.resolve(_order())
        assert not camera.is_service
        assert camera.category is None
        assert cloud.is_service

    def test_already_dispatched_units_are_subtracted(self):
        shipped = StockItem(serial_number="CAM-1", product_name="Camera X")
        shipped.dispatch("ORD-1", date(2026, 2, 1))
        shipments = FakeShipmentRepository()
        shipments.add(
            Shipment.outbound("ORD-1", "DTDC", "Surface", shipping_cost=None)
        )
        resolver = OrderRequirementResolver(
            FakeProductRepository(_catalog()),
            FakeStockRepository([shipped]),
            shipments,
        )
        camera, cloud = resolver.resolve(_order())

        assert camera.already_dispatched == 1
        assert camera.required_qty == 2
        # an earlier shipment already activated the service
        assert cloud.required_qty == 0
        assert not cloud.is_pending_service

    def test_duplicate_lines_share_dispatched_units(self):
        shipped = []
        for n in range(1, 4):
            item = StockItem(serial_number=f"CAM-{n}", product_name="Camera X")
            item.dispatch("ORD-2", date(2026, 2, 1))
            shipped.append(item)
        order = SalesOrder(
            order_id="ORD-2",
            customer_name="Acme Traders",
            lines=[
                OrderLine("Camera X", Quantity(2)),
                OrderLine("camera x", Quantity(2)),
            ],
        )
        resolver = OrderRequirementResolver(
            FakeProductRepository(_catalog()),
            FakeStockRepository(shipped),
            FakeShipmentRepository(),
        )

        first, second = resolver.resolve(order)

        assert (first.already_dispatched, first.required_qty) == (2, 0)
        assert (second.already_dispatched, second.required_qty) == (1, 1)

    def test_catalog_failure_is_not_fatal(self, caplog):
        resolver = OrderRequirementResolver(
            FakeProductRepository(_catalog(), broken=True),
            FakeStockRepository(),
            FakeShipmentRepository(),
        )
        with caplog.at_level(logging.WARNING):
            camera, cloud = resolver.resolve(_order())

        assert camera.category is None
        assert cloud.category is None
        assert cloud.is_service
        assert "Catalog lookup failed" in caplog.text
