"""Tests for the JSON-file repositories and the outbox mailer."""

import json
from datetime import date

import pytest

from dms.application.ports import DispatchEmail
from dms.domain.exceptions import ConcurrencyConflictError, PersistenceError
from dms.domain.model.order import OrderLine, SalesOrder
from dms.domain.model.product import Product, ProductType
from dms.domain.model.renewal import Renewal
from dms.domain.model.shipment import Shipment, ShipmentType
from dms.domain.model.stock_item import StockItem, StockStatus
from dms.domain.model.value_objects import Money, Quantity
from dms.infrastructure.mail.outbox_mailer import OutboxMailer
from dms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from dms.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from dms.infrastructure.persistence.json_renewal_repository import (
    JsonRenewalRepository,
)
from dms.infrastructure.persistence.json_shipment_repository import (
    JsonShipmentRepository,
)
from dms.infrastructure.persistence.json_stock_repository import JsonStockRepository


@pytest.fixture
def stock_repo(tmp_path):
    repo = JsonStockRepository(tmp_path / "stock.json")
    for n in range(1, 4):
        repo.save(StockItem(serial_number=f"CAM-{n}", product_name="Camera X"))
    return repo


class TestJsonStockRepository:

    def test_creates_empty_file(self, tmp_path):
        repo = JsonStockRepository(tmp_path / "nested" / "stock.json")
        assert repo.file_path.read_text(encoding="utf-8") == "[]"
        assert repo.list_all() == []

    def test_list_available_is_case_insensitive_and_limited(self, stock_repo):
        found = stock_repo.list_available("camera x", limit=2)
        assert [i.serial_number for i in found] == ["CAM-1", "CAM-2"]
        assert stock_repo.list_available("Camera X", limit=0) == []

    def test_mark_dispatched_persists(self, stock_repo, tmp_path):
        stock_repo.mark_dispatched(
            ["CAM-1", "CAM-3"], "ORD-1", date(2026, 3, 1), "C-1", "Acme"
        )

        reloaded = JsonStockRepository(tmp_path / "stock.json")
        item = reloaded.get_by_serial("CAM-3")
        assert item.status == StockStatus.DISPATCHED
        assert item.dispatch_date == date(2026, 3, 1)
        assert item.customer_name == "Acme"
        dispatched = reloaded.list_by_order("ORD-1", StockStatus.DISPATCHED)
        assert [i.serial_number for i in dispatched] == ["CAM-1", "CAM-3"]
        assert [i.serial_number for i in reloaded.list_available("Camera X", 5)] == [
            "CAM-2"
        ]

    def test_conflict_leaves_file_untouched(self, stock_repo):
        stock_repo.mark_dispatched(["CAM-2"], "ORD-1", date(2026, 3, 1), None, None)
        before = stock_repo.file_path.read_text(encoding="utf-8")

        with pytest.raises(ConcurrencyConflictError) as exc:
            stock_repo.mark_dispatched(
                ["CAM-1", "CAM-2", "CAM-404"], "ORD-2", date(2026, 3, 2), None, None
            )

        assert exc.value.serials == ["CAM-2", "CAM-404"]
        assert stock_repo.file_path.read_text(encoding="utf-8") == before

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        path = tmp_path / "stock.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JsonStockRepository(path)
        with pytest.raises(PersistenceError, match="Cannot read stock.json"):
            repo.list_all()


class TestJsonOrderRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(
            SalesOrder(
                order_id="ORD-1",
                customer_name="Acme",
                courier_cost=Money.of("99.50"),
                lines=[OrderLine("Camera X", Quantity(2))],
            )
        )

        order = repo.get_by_id("ORD-1")
        assert order.courier_cost == Money.of("99.50")
        assert order.lines[0].quantity.value == 2
        assert repo.get_by_id("ORD-2") is None

    def test_reads_hand_written_orders(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(
            json.dumps(
                [{"order_id": "ORD-9", "items": [{"product_name": "Tablet", "quantity": 1}]}]
            ),
            encoding="utf-8",
        )
        order = JsonOrderRepository(path).get_by_id("ORD-9")
        assert order.courier_cost is None
        assert order.total_units == 1


class TestJsonCatalogAndRecords:

    def test_product_lookup_by_names(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(name="Camera X", category="Cameras"))
        repo.save(Product(name="SIM Charges", product_type=ProductType.SERVICE))

        found = repo.find_by_names(["camera x", "SIM Charges", "Drone"])

        assert set(found) == {"camera x", "SIM Charges"}
        assert found["SIM Charges"].is_service
        assert found["camera x"].category == "Cameras"

    def test_shipments_get_ids_and_delete_by_order(self, tmp_path):
        repo = JsonShipmentRepository(tmp_path / "shipments.json")
        first = repo.add(Shipment.service_activation("ORD-1"))
        second = repo.add(
            Shipment.outbound("ORD-2", "DTDC", "Air", Money.of("120"))
        )

        assert (first.id, second.id) == (1, 2)
        [loaded] = repo.list_by_order("ORD-2")
        assert loaded.shipment_type == ShipmentType.OUTBOUND
        assert loaded.shipping_cost == Money.of("120")
        assert repo.delete_for_order("ORD-1") == 1
        assert repo.list_by_order("ORD-1") == []

    def test_renewals_sorted_by_end_date(self, tmp_path):
        repo = JsonRenewalRepository(tmp_path / "renewals.json")
        repo.add_all(
            [
                Renewal.start_cycle("ORD-2", "Cloud Charges", date(2026, 5, 1)),
                Renewal.start_cycle("ORD-1", "SIM Charges", date(2026, 1, 1)),
            ]
        )

        renewals = repo.list_all()

        assert [r.order_id for r in renewals] == ["ORD-1", "ORD-2"]
        assert [r.id for r in renewals] == [2, 1]
        assert renewals[0].renewal_end_date == date(2026, 12, 31)


class TestOutboxMailer:

    def test_queues_email(self, tmp_path):
        mailer = OutboxMailer(tmp_path / "outbox.json")
        mailer.send_dispatch_email(
            DispatchEmail(
                order_id="ORD-1",
                dispatch_date="17/10/2026",
                serial_numbers=["CAM-1"],
                product_name="Camera X",
                total_quantity=1,
            )
        )

        [queued] = mailer.pending()
        assert queued["template"] == "dispatch"
        assert queued["order_id"] == "ORD-1"
        assert queued["serial_numbers"] == ["CAM-1"]
        assert "queued_at" in queued
