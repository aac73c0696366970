"""ScanSession — the in-memory state of one dispatch before confirmation.

A session is an immutable snapshot.  Every operation (admit a unit,
remove a unit) returns a new session and leaves the old one untouched,
so a rejected scan can never corrupt the state the operator sees.
Nothing here touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from dms.domain.exceptions import ScanRejectedError, ScanRejection, ValidationError
from dms.domain.model.order import SalesOrder
from dms.domain.model.requirement import RequirementLine
from dms.domain.model.stock_item import StockItem, StockStatus


@dataclass(frozen=True)
class ScannedDevice:
    serial_number: str
    product_name: str
    category: str | None = None


@dataclass(frozen=True)
class ScanSession:
    """Snapshot of a dispatch dialog.

    Invariants:
    - no serial appears twice in ``devices``
    - every device serial is on exactly one line's ``scanned_serials``
      and every line serial is a device
    """

    order: SalesOrder
    lines: tuple[RequirementLine, ...]
    devices: tuple[ScannedDevice, ...] = ()

    def __post_init__(self) -> None:
        serials = [d.serial_number for d in self.devices]
        if len(set(serials)) != len(serials):
            raise ValidationError("A serial can be scanned only once per dispatch")
        on_lines = [s for line in self.lines for s in line.scanned_serials]
        if sorted(on_lines) != sorted(serials):
            raise ValidationError("Scanned devices and requirement lines disagree")

    @staticmethod
    def start(order: SalesOrder, lines: list[RequirementLine]) -> ScanSession:
        """Open a session with nothing scanned yet."""
        return ScanSession(order=order, lines=tuple(lines))

    # --- Queries ---------------------------------------------------------------

    @property
    def order_id(self) -> str:
        return self.order.order_id

    @property
    def serials(self) -> list[str]:
        return [d.serial_number for d in self.devices]

    def has_serial(self, serial: str) -> bool:
        return any(d.serial_number == serial for d in self.devices)

    @property
    def physical_lines(self) -> list[RequirementLine]:
        """Physical lines that still had units to ship when the session opened."""
        return [
            line for line in self.lines
            if not line.is_service and line.required_qty > 0
        ]

    @property
    def pending_service_lines(self) -> list[RequirementLine]:
        return [line for line in self.lines if line.is_pending_service]

    @property
    def all_items_scanned(self) -> bool:
        return all(line.is_satisfied for line in self.lines)

    @property
    def has_anything_to_dispatch(self) -> bool:
        return bool(self.devices) or bool(self.pending_service_lines)

    @property
    def can_finalize(self) -> bool:
        return self.all_items_scanned and self.has_anything_to_dispatch

    @property
    def has_only_services(self) -> bool:
        return not self.physical_lines and bool(self.pending_service_lines)

    @property
    def units_this_dispatch(self) -> int:
        return len(self.devices) + sum(
            line.required_qty for line in self.pending_service_lines
        )

    @property
    def remaining_after_dispatch(self) -> int:
        ordered = sum(line.ordered_qty for line in self.lines)
        shipped = sum(
            min(line.already_dispatched, line.ordered_qty) for line in self.lines
        )
        return ordered - shipped - self.units_this_dispatch

    def spare_capacity_for(self, product_name: str) -> int:
        return sum(
            line.spare_capacity
            for line in self.lines
            if not line.is_service and line.matches(product_name)
        )

    # --- Reducers -------------------------------------------------------------

    def normalize_serial(self, raw: str | None) -> str:
        """Run the checks that need no ledger lookup.

        Returns the trimmed serial or raises ``ScanRejectedError``.
        """
        serial = (raw or "").strip()
        if not serial:
            raise ScanRejectedError(
                ScanRejection.MISSING_SERIAL, "Please enter a serial number"
            )
        if self.has_serial(serial):
            raise ScanRejectedError(
                ScanRejection.ALREADY_SCANNED, "This device is already scanned"
            )
        return serial

    def admit(self, item: StockItem) -> ScanSession:
        """Add a ledger unit to the session.

        The first line, in order, for the same product with spare
        capacity receives the serial.
        """
        self.normalize_serial(item.serial_number)
        if item.status == StockStatus.DISPATCHED:
            raise ScanRejectedError(
                ScanRejection.ALREADY_DISPATCHED, "Device is already dispatched"
            )

        index = self._line_with_capacity(item.product_name)
        if index is None:
            raise self._no_capacity_error(item.product_name)

        lines = list(self.lines)
        lines[index] = lines[index].with_serial(item.serial_number)
        device = ScannedDevice(
            serial_number=item.serial_number,
            product_name=item.product_name,
            category=item.category,
        )
        return replace(self, lines=tuple(lines), devices=self.devices + (device,))

    def remove(self, serial: str) -> ScanSession:
        """Drop a scanned unit; nothing was persisted for it yet."""
        if not self.has_serial(serial):
            raise ValidationError(f"Device {serial} is not in this dispatch")
        lines = tuple(
            line.without_serial(serial) if serial in line.scanned_serials else line
            for line in self.lines
        )
        devices = tuple(d for d in self.devices if d.serial_number != serial)
        return replace(self, lines=lines, devices=devices)

    # --- Internal helpers -----------------------------------------------------

    def _line_with_capacity(self, product_name: str) -> int | None:
        for i, line in enumerate(self.lines):
            if (
                line.matches(product_name)
                and not line.is_service
                and line.spare_capacity > 0
            ):
                return i
        return None

    def _no_capacity_error(self, product_name: str) -> ScanRejectedError:
        for line in self.lines:
            if not line.matches(product_name):
                continue
            if line.is_completed:
                return ScanRejectedError(
                    ScanRejection.UNITS_ALREADY_DISPATCHED,
                    f"All {product_name} units already dispatched",
                )
            return ScanRejectedError(
                ScanRejection.ALL_UNITS_SCANNED,
                f"All remaining {product_name} units already scanned",
            )
        return ScanRejectedError(
            ScanRejection.PRODUCT_NOT_IN_ORDER, "This product is not in the order"
        )
