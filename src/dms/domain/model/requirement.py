"""RequirementLine — what one order line still needs from this dispatch."""

from __future__ import annotations

from dataclasses import dataclass, replace

from dms.domain.exceptions import ValidationError


@dataclass(frozen=True)
class RequirementLine:
    """One product line of the order being dispatched.

    ``required_qty`` is what this dispatch must cover: the ordered
    quantity minus whatever earlier dispatches already shipped.  Service
    lines need no serials, so their ``scanned_qty`` is pinned to
    ``required_qty`` from the start.

    Invariant: ``scanned_qty <= required_qty``.
    """

    product_name: str
    ordered_qty: int
    already_dispatched: int = 0
    is_service: bool = False
    category: str | None = None
    scanned_serials: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.ordered_qty <= 0:
            raise ValidationError(
                f"Ordered quantity for {self.product_name} must be positive"
            )
        if self.is_service and self.scanned_serials:
            raise ValidationError(
                f"Service product {self.product_name} cannot carry serials"
            )
        if len(set(self.scanned_serials)) != len(self.scanned_serials):
            raise ValidationError(
                f"Duplicate serial on line {self.product_name}"
            )
        if len(self.scanned_serials) > self.required_qty:
            raise ValidationError(
                f"Cannot scan {len(self.scanned_serials)} of {self.product_name} "
                f"— only {self.required_qty} required"
            )

    @property
    def required_qty(self) -> int:
        return max(0, self.ordered_qty - self.already_dispatched)

    @property
    def scanned_qty(self) -> int:
        if self.is_service:
            return self.required_qty
        return len(self.scanned_serials)

    @property
    def spare_capacity(self) -> int:
        return self.required_qty - self.scanned_qty

    @property
    def is_satisfied(self) -> bool:
        return self.scanned_qty >= self.required_qty

    @property
    def is_completed(self) -> bool:
        """Nothing left for any dispatch to do on this line."""
        return self.required_qty == 0

    @property
    def is_pending_service(self) -> bool:
        return self.is_service and self.required_qty > 0

    def matches(self, product_name: str) -> bool:
        return self.product_name.lower() == product_name.lower()

    def with_serial(self, serial: str) -> RequirementLine:
        return replace(self, scanned_serials=self.scanned_serials + (serial,))

    def without_serial(self, serial: str) -> RequirementLine:
        return replace(
            self,
            scanned_serials=tuple(s for s in self.scanned_serials if s != serial),
        )
