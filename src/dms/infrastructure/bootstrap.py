"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from dms.application.add_product import AddProductHandler
from dms.application.add_stock import AddStockHandler
from dms.application.bulk_allocate import BulkAllocateHandler
from dms.application.delete_dispatch import DeleteDispatchHandler
from dms.application.finalize_dispatch import FinalizeDispatchHandler
from dms.application.open_dispatch import OpenDispatchHandler
from dms.application.resend_dispatch_email import ResendDispatchEmailHandler
from dms.application.scan_serial import ScanSerialHandler
from dms.application.show_dispatch_status import ShowDispatchStatusHandler
from dms.application.show_dispatched_devices import ShowDispatchedDevicesHandler
from dms.application.show_renewals import ShowRenewalsHandler
from dms.application.show_stock import ShowStockHandler
from dms.application.update_tracking import UpdateTrackingHandler
from dms.domain.service.requirement_resolver import OrderRequirementResolver
from dms.infrastructure.mail.outbox_mailer import OutboxMailer
from dms.infrastructure.persistence.json_notification_repository import (
    JsonNotificationRepository,
)
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
from dms.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


class Container:
    """Repositories and handlers for one data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.stock_repo = JsonStockRepository(data_dir / "stock.json")
        self.product_repo = JsonProductRepository(data_dir / "products.json")
        self.order_repo = JsonOrderRepository(data_dir / "orders.json")
        self.shipment_repo = JsonShipmentRepository(data_dir / "shipments.json")
        self.renewal_repo = JsonRenewalRepository(data_dir / "renewals.json")
        self.notification_repo = JsonNotificationRepository(
            data_dir / "notifications.json"
        )
        self.mailer = OutboxMailer(data_dir / "outbox.json")

    def unit_of_work(self) -> JsonUnitOfWork:
        return JsonUnitOfWork(self.stock_repo.file_path, self.shipment_repo.file_path)

    # --- Handlers -------------------------------------------------------------

    def open_dispatch(self) -> OpenDispatchHandler:
        resolver = OrderRequirementResolver(
            self.product_repo, self.stock_repo, self.shipment_repo
        )
        return OpenDispatchHandler(self.order_repo, resolver)

    def scan_serial(self) -> ScanSerialHandler:
        return ScanSerialHandler(self.stock_repo)

    def bulk_allocate(self) -> BulkAllocateHandler:
        return BulkAllocateHandler(self.stock_repo)

    def finalize_dispatch(self) -> FinalizeDispatchHandler:
        return FinalizeDispatchHandler(
            stock_repo=self.stock_repo,
            shipment_repo=self.shipment_repo,
            renewal_repo=self.renewal_repo,
            notification_repo=self.notification_repo,
            mailer=self.mailer,
            uow=self.unit_of_work(),
        )

    def delete_dispatch(self) -> DeleteDispatchHandler:
        return DeleteDispatchHandler(
            stock_repo=self.stock_repo,
            shipment_repo=self.shipment_repo,
            renewal_repo=self.renewal_repo,
            uow=self.unit_of_work(),
        )

    def show_dispatch_status(self) -> ShowDispatchStatusHandler:
        return ShowDispatchStatusHandler(self.open_dispatch())

    def show_dispatched_devices(self) -> ShowDispatchedDevicesHandler:
        return ShowDispatchedDevicesHandler(
            self.open_dispatch(), self.stock_repo, self.shipment_repo
        )

    def resend_dispatch_email(self) -> ResendDispatchEmailHandler:
        return ResendDispatchEmailHandler(
            self.open_dispatch(), self.stock_repo, self.shipment_repo, self.mailer
        )

    def update_tracking(self) -> UpdateTrackingHandler:
        return UpdateTrackingHandler(self.shipment_repo)

    def show_renewals(self) -> ShowRenewalsHandler:
        return ShowRenewalsHandler(self.renewal_repo)

    def show_stock(self) -> ShowStockHandler:
        return ShowStockHandler(self.stock_repo)

    def add_stock(self) -> AddStockHandler:
        return AddStockHandler(self.stock_repo, self.product_repo)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.product_repo)
