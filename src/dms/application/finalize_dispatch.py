"""Application service: Finalize Dispatch use case.

Primary effects (ledger update + shipment record) are applied inside a
unit of work: either both stand, or neither does and the operator is
told which step failed.  Renewals, the admin notification and the
customer email are follow-ups.  Their failures are logged and never undo
the dispatch.
"""

from __future__ import annotations

import logging

from dms.application.dto import DispatchDetails, DispatchResult
from dms.application.ports import DispatchEmail, DispatchMailer
from dms.domain.exceptions import (
    DispatchFailedError,
    PersistenceError,
    RollbackFailedError,
    ValidationError,
)
from dms.domain.model.notification import Notification
from dms.domain.model.renewal import RENEWAL_CYCLE_DAYS, Renewal
from dms.domain.model.scan_session import ScanSession
from dms.domain.model.shipment import Shipment
from dms.domain.repository.notification_repository import NotificationRepository
from dms.domain.repository.renewal_repository import RenewalRepository
from dms.domain.repository.shipment_repository import ShipmentRepository
from dms.domain.repository.stock_repository import StockRepository
from dms.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

STEP_INVENTORY = "inventory update"
STEP_SHIPMENT = "shipment record"


class FinalizeDispatchHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        shipment_repo: ShipmentRepository,
        renewal_repo: RenewalRepository,
        notification_repo: NotificationRepository,
        mailer: DispatchMailer,
        uow: UnitOfWork,
    ) -> None:
        self._stock_repo = stock_repo
        self._shipment_repo = shipment_repo
        self._renewal_repo = renewal_repo
        self._notification_repo = notification_repo
        self._mailer = mailer
        self._uow = uow

    def handle(
        self,
        session: ScanSession,
        details: DispatchDetails,
        allow_partial: bool = False,
    ) -> DispatchResult:
        """Confirm the dispatch described by ``session``.

        Without ``allow_partial`` every requirement line must be fully
        scanned.  With it, whatever has been scanned so far ships and the
        rest stays open for a later dispatch.
        """
        order = session.order
        if not session.has_anything_to_dispatch:
            raise ValidationError(f"Nothing to dispatch for order {order.order_id}")
        if not allow_partial and not session.all_items_scanned:
            missing = sum(line.spare_capacity for line in session.lines)
            raise ValidationError(
                f"Cannot dispatch order {order.order_id} — "
                f"{missing} item(s) still to scan"
            )

        serials = session.serials
        shipment = self._commit_primary(session, details)

        renewals_created = self._create_renewals(session, details)

        remaining = session.remaining_after_dispatch
        is_complete = remaining == 0
        self._notify(session, is_complete, remaining)

        if session.has_only_services:
            message = f"Service activated for order {order.order_id}!"
        elif is_complete:
            message = (
                f"Dispatch completed! All items dispatched for order {order.order_id}."
            )
        else:
            message = (
                f"Partial dispatch done! {session.units_this_dispatch} item(s) "
                f"dispatched, {remaining} remaining."
            )

        self._send_email(session, details)

        logger.info(
            "Order %s dispatched: %d device(s), %d service line(s), shipment #%s",
            order.order_id,
            len(serials),
            len(session.pending_service_lines),
            shipment.id,
        )
        return DispatchResult(
            order_id=order.order_id,
            shipment_id=shipment.id,  # type: ignore[arg-type]
            shipment_type=shipment.shipment_type.value,
            serial_numbers=serials,
            services_activated=len(session.pending_service_lines),
            renewals_created=renewals_created,
            is_complete=is_complete,
            remaining=remaining,
            message=message,
        )

    # --- Primary steps --------------------------------------------------------

    def _commit_primary(self, session: ScanSession, details: DispatchDetails) -> Shipment:
        order = session.order
        completed: list[str] = []
        try:
            with self._uow:
                if session.serials:
                    self._stock_repo.mark_dispatched(
                        session.serials,
                        order_id=order.order_id,
                        dispatch_date=details.dispatch_date,
                        customer_code=order.customer_code,
                        customer_name=order.customer_name,
                    )
                    completed.append(STEP_INVENTORY)
                shipment = self._shipment_repo.add(self._build_shipment(session, details))
                completed.append(STEP_SHIPMENT)
        except RollbackFailedError as exc:
            logger.critical(
                "Dispatch of order %s failed after %s and could not be undone: %s",
                order.order_id,
                completed or "no steps",
                exc,
            )
            raise DispatchFailedError(
                f"Failed to dispatch: {exc}", completed_steps=completed, rolled_back=False
            ) from exc
        except PersistenceError as exc:
            logger.error(
                "Dispatch of order %s failed after %s: %s",
                order.order_id,
                completed or "no steps",
                exc,
            )
            raise DispatchFailedError(
                f"Failed to dispatch: {exc}", completed_steps=completed, rolled_back=True
            ) from exc
        return shipment

    @staticmethod
    def _build_shipment(session: ScanSession, details: DispatchDetails) -> Shipment:
        if session.has_only_services:
            return Shipment.service_activation(session.order_id, notes=details.notes)
        return Shipment.outbound(
            session.order_id,
            courier_partner=details.courier_partner,
            shipping_mode=details.shipping_mode,
            shipping_cost=session.order.courier_cost,
            notes=details.notes,
        )

    # --- Follow-ups -----------------------------------------------------------

    def _create_renewals(self, session: ScanSession, details: DispatchDetails) -> int:
        order = session.order
        records = [
            Renewal.start_cycle(
                order_id=order.order_id,
                product_name=line.product_name,
                dispatch_date=details.dispatch_date,
                customer_code=order.customer_code,
                customer_name=order.customer_name,
                company_name=order.company_name,
            )
            for line in session.pending_service_lines
        ]
        if not records:
            return 0
        try:
            self._renewal_repo.add_all(records)
        except PersistenceError as exc:
            logger.error(
                "Failed to create renewal records for order %s: %s",
                order.order_id,
                exc,
            )
            return 0
        logger.info(
            "Created %d renewal record(s) with %d-day cycle for order %s",
            len(records),
            RENEWAL_CYCLE_DAYS,
            order.order_id,
        )
        return len(records)

    def _notify(self, session: ScanSession, is_complete: bool, remaining: int) -> None:
        order = session.order
        customer = order.customer_name or "customer"
        if is_complete:
            title = "Dispatch Completed"
            message = f"Order {order.order_id} for {customer} has been fully dispatched."
        else:
            title = "Partial Dispatch"
            message = (
                f"Order {order.order_id}: {session.units_this_dispatch} item(s) "
                f"dispatched, {remaining} remaining."
            )
        notification = Notification(
            title=title,
            message=message,
            reference_id=order.order_id,
            metadata={
                "order_id": order.order_id,
                "customer_name": order.customer_name,
                "devices_count": len(session.devices),
                "is_partial": not is_complete,
                "remaining": remaining,
            },
        )
        try:
            self._notification_repo.add(notification)
        except PersistenceError as exc:
            logger.error(
                "Failed to record dispatch notification for order %s: %s",
                order.order_id,
                exc,
            )

    def _send_email(self, session: ScanSession, details: DispatchDetails) -> None:
        product_names = ", ".join(
            line.product_name
            for line in session.lines
            if line.scanned_serials or line.is_pending_service
        )
        email = DispatchEmail(
            order_id=session.order_id,
            dispatch_date=details.dispatch_date.strftime("%d/%m/%Y"),
            serial_numbers=session.serials,
            product_name=product_names,
            total_quantity=session.units_this_dispatch,
        )
        try:
            self._mailer.send_dispatch_email(email)
        except Exception:
            logger.exception(
                "Failed to send dispatch email for order %s", session.order_id
            )
