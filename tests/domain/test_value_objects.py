"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from dms.domain.exceptions import ValidationError
from dms.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_rupees(self):
        m = Money(Decimal("250.00"))
        assert m.amount == Decimal("250.00")
        assert m.currency == "INR"

    def test_of_factory_from_string(self):
        assert Money.of("99.50").amount == Decimal("99.50")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("1").is_zero

    def test_str(self):
        assert str(Money.of("120")) == "₹120.00"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)
