"""Unit tests for RequirementLine."""

import pytest

from dms.domain.exceptions import ValidationError
from dms.domain.model.requirement import RequirementLine


class TestRequirementLine:

    def test_physical_line_starts_unscanned(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=2)
        assert line.required_qty == 2
        assert line.scanned_qty == 0
        assert not line.is_satisfied

    def test_service_line_is_pre_satisfied(self):
        line = RequirementLine(product_name="Cloud Charges", ordered_qty=2, is_service=True)
        assert line.scanned_qty == 2
        assert line.is_satisfied
        assert line.is_pending_service

    def test_already_dispatched_reduces_requirement(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=5, already_dispatched=3)
        assert line.required_qty == 2

    def test_requirement_never_negative(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=2, already_dispatched=4)
        assert line.required_qty == 0
        assert line.is_completed

    def test_with_serial_beyond_requirement_rejected(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=1).with_serial("A")
        with pytest.raises(ValidationError, match="only 1 required"):
            line.with_serial("B")

    def test_duplicate_serial_rejected(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=3).with_serial("A")
        with pytest.raises(ValidationError, match="Duplicate serial"):
            line.with_serial("A")

    def test_service_line_cannot_hold_serials(self):
        line = RequirementLine(product_name="SIM Charges", ordered_qty=1, is_service=True)
        with pytest.raises(ValidationError, match="cannot carry serials"):
            line.with_serial("A")

    def test_without_serial(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=3)
        line = line.with_serial("A").with_serial("B").without_serial("A")
        assert line.scanned_serials == ("B",)

    def test_matches_ignores_case(self):
        line = RequirementLine(product_name="Camera X", ordered_qty=1)
        assert line.matches("camera x")
