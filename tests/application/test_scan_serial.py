"""Integration tests for the ScanSerial use case."""

from datetime import date

import pytest

from dms.domain.exceptions import ScanRejectedError, ScanRejection, ValidationError
from dms.domain.model.stock_item import StockItem
from tests.scenario import Backend


def _scan(backend, session, *serials):
    scanner = backend.scanner()
    for serial in serials:
        session = scanner.handle(session, serial).session
    return session


class TestScanHappyPath:

    def test_scan_adds_device_to_matching_line(self):
        backend = Backend()
        session = backend.open("ORD-MIX")

        outcome = backend.scanner().handle(session, "  CAM-1 ")

        assert outcome.message == "Added: Camera X"
        assert outcome.session.serials == ["CAM-1"]
        camera = outcome.session.lines[0]
        assert camera.scanned_serials == ("CAM-1",)
        assert outcome.session.devices[0].category == "Cameras"

    def test_scan_does_not_touch_ledger(self):
        backend = Backend()
        session = _scan(backend, backend.open("ORD-MIX"), "CAM-1", "CAM-2")

        assert session.all_items_scanned
        assert backend.stock.get_by_serial("CAM-1").is_available
        assert backend.shipments.list_by_order("ORD-MIX") == []

    def test_original_session_is_unchanged(self):
        backend = Backend()
        before = backend.open("ORD-MIX")

        after = backend.scanner().handle(before, "CAM-1").session

        assert before.serials == []
        assert after.serials == ["CAM-1"]

    def test_remove_frees_capacity(self):
        backend = Backend()
        session = _scan(backend, backend.open("ORD-MIX"), "CAM-1", "CAM-2")

        outcome = backend.scanner().remove(session, "CAM-1")

        assert outcome.message == "Removed: CAM-1"
        assert outcome.session.serials == ["CAM-2"]
        assert not outcome.session.all_items_scanned
        # the freed slot can be filled again
        refilled = _scan(backend, outcome.session, "CAM-3")
        assert refilled.all_items_scanned


class TestScanRejections:

    def test_empty_input(self):
        backend = Backend()
        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(backend.open("ORD-MIX"), "   ")
        assert exc.value.reason == ScanRejection.MISSING_SERIAL

    def test_duplicate_scan(self):
        backend = Backend()
        session = _scan(backend, backend.open("ORD-MIX"), "CAM-1")

        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(session, "CAM-1")
        assert exc.value.reason == ScanRejection.ALREADY_SCANNED
        assert session.serials == ["CAM-1"]

    def test_unknown_serial(self):
        backend = Backend()
        with pytest.raises(ScanRejectedError, match="not found in inventory") as exc:
            backend.scanner().handle(backend.open("ORD-MIX"), "NOPE-1")
        assert exc.value.reason == ScanRejection.NOT_FOUND

    def test_product_not_in_order(self):
        backend = Backend()
        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(backend.open("ORD-MIX"), "TAB-1")
        assert exc.value.reason == ScanRejection.PRODUCT_NOT_IN_ORDER

    def test_over_scan_rejected(self):
        backend = Backend()
        session = _scan(backend, backend.open("ORD-MIX"), "CAM-1", "CAM-2")

        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(session, "CAM-3")
        assert exc.value.reason == ScanRejection.ALL_UNITS_SCANNED
        assert "All remaining Camera X units already scanned" in str(exc.value)

    def test_dispatched_device_rejected(self):
        backend = Backend()
        backend.stock.mark_dispatched(
            ["CAM-1"], "ORD-OLD", dispatch_date=date(2026, 1, 5), customer_code=None,
            customer_name=None,
        )

        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(backend.open("ORD-BULK"), "CAM-1")
        assert exc.value.reason == ScanRejection.ALREADY_DISPATCHED

    def test_line_already_fully_dispatched(self):
        backend = Backend()
        backend.stock.mark_dispatched(
            ["CAM-1", "CAM-2"], "ORD-MIX", dispatch_date=date(2026, 1, 5),
            customer_code="C-100", customer_name="Acme Traders",
        )
        backend.stock.save(
            StockItem(serial_number="CAM-9", product_name="Camera X", category="Cameras")
        )

        session = backend.open("ORD-MIX")

        with pytest.raises(ScanRejectedError) as exc:
            backend.scanner().handle(session, "CAM-9")
        assert exc.value.reason == ScanRejection.UNITS_ALREADY_DISPATCHED

    def test_remove_unknown_serial(self):
        backend = Backend()
        with pytest.raises(ValidationError, match="not in this dispatch"):
            backend.scanner().remove(backend.open("ORD-MIX"), "CAM-1")
