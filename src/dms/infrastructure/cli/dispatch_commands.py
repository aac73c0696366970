"""CLI commands for the dispatch workflow."""

from __future__ import annotations

from datetime import date, datetime

import click

from dms.application.dto import DispatchDetails, RequirementLineDTO, describe_session
from dms.domain.exceptions import DispatchFailedError, DomainException
from dms.domain.model.role import Role
from dms.domain.model.scan_session import ScanSession
from dms.infrastructure.bootstrap import Container

COURIER_PARTNERS = ["Trackon", "DTDC", "Porter", "Self Pick", "By Bus"]
DISPATCH_METHODS = ["Surface", "Air", "Local Delivery"]

BULK_COMMAND = ":bulk"
REMOVE_COMMAND = ":rm"


def _parse_date(ctx, param, value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Expected YYYY-MM-DD.")


def _display_lines(lines: list[RequirementLineDTO]) -> None:
    """Shared formatting for the dispatch checklist."""
    click.echo(
        f"  {'Product':<24} {'Category':<18} {'Ordered':>8} {'Sent':>6} {'Scanned':>8}"
    )
    click.echo(f"  {'-'*68}")
    for line in lines:
        scanned = f"{line.scanned}/{line.required}"
        tag = " (service)" if line.is_service else ""
        click.echo(
            f"  {line.product_name + tag:<24} {line.category:<18} "
            f"{line.ordered:>8} {line.already_dispatched:>6} {scanned:>8}"
        )
    click.echo(f"  {'-'*68}")


def _display_session(session: ScanSession) -> None:
    order = session.order
    click.echo(f"Order {order.order_id}  ({order.customer_name or 'no customer'})")
    click.echo()
    _display_lines(describe_session(session))
    click.echo(f"  Devices scanned: {len(session.devices)}")


def _scan_loop(container: Container, session: ScanSession) -> ScanSession:
    """Read serials one per line until an empty line.

    ``:bulk PRODUCT`` allocates the rest of a product from stock and
    ``:rm SERIAL`` removes a scanned unit.  Anything else is a serial.
    """
    scanner = container.scan_serial()
    allocator = container.bulk_allocate()
    while True:
        raw = click.prompt("Scan", default="", show_default=False).strip()
        if not raw:
            return session
        try:
            command, _, argument = raw.partition(" ")
            if command == BULK_COMMAND:
                outcome = allocator.handle(session, argument.strip())
            elif command == REMOVE_COMMAND:
                outcome = scanner.remove(session, argument.strip())
            else:
                outcome = scanner.handle(session, raw)
        except DomainException as exc:
            click.secho(f"  ✗ {exc}", fg="red", err=True)
            continue
        session = outcome.session
        click.secho(f"  ✓ {outcome.message}", fg="green")


@click.command("create")
@click.option("--order", "order_id", required=True, help="Order ID to dispatch.")
@click.option("--serial", "serials", multiple=True, help="Serial to scan (repeatable).")
@click.option("--bulk", "bulk_products", multiple=True, help="Allocate a product from stock (repeatable).")
@click.option("--date", "dispatch_date", callback=_parse_date, default=None, help="Dispatch date, YYYY-MM-DD (default today).")
@click.option("--courier", type=click.Choice(COURIER_PARTNERS, case_sensitive=False), default=None)
@click.option("--mode", type=click.Choice(DISPATCH_METHODS, case_sensitive=False), default=None)
@click.option("--notes", default=None, help="Free-text note stored on the shipment.")
@click.option("--partial", is_flag=True, default=False, help="Allow dispatching fewer units than ordered.")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def dispatch_create(
    container: Container,
    order_id: str,
    serials: tuple[str, ...],
    bulk_products: tuple[str, ...],
    dispatch_date: date,
    courier: str | None,
    mode: str | None,
    notes: str | None,
    partial: bool,
    yes: bool,
) -> None:
    """Scan devices for an order and confirm the dispatch.

    Without --serial/--bulk, serials are read interactively.
    """
    try:
        session = container.open_dispatch().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_session(session)

    if serials or bulk_products:
        scanner = container.scan_serial()
        allocator = container.bulk_allocate()
        try:
            for name in bulk_products:
                outcome = allocator.handle(session, name)
                session = outcome.session
                click.echo(outcome.message)
            for serial in serials:
                outcome = scanner.handle(session, serial)
                session = outcome.session
                click.echo(outcome.message)
        except DomainException as exc:
            raise click.ClickException(str(exc))
    elif session.physical_lines:
        session = _scan_loop(container, session)

    _display_session(session)

    if not session.has_anything_to_dispatch:
        raise click.ClickException("Nothing to dispatch for this order.")
    if not session.all_items_scanned and not partial:
        raise click.ClickException(
            "Not all items are scanned. Scan the rest or pass --partial."
        )
    if not yes:
        click.confirm(
            f"Dispatch {session.units_this_dispatch} item(s) for order {order_id}?",
            abort=True,
        )

    details = DispatchDetails(
        dispatch_date=dispatch_date,
        courier_partner=courier,
        shipping_mode=mode,
        notes=notes,
    )
    try:
        result = container.finalize_dispatch().handle(
            session, details, allow_partial=partial
        )
    except DispatchFailedError as exc:
        done = ", ".join(exc.completed_steps) or "nothing"
        state = "rolled back" if exc.rolled_back else "NOT rolled back"
        raise click.ClickException(f"{exc} (completed: {done}; {state})")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    if result.renewals_created:
        click.echo(
            f"Created {result.renewals_created} renewal record(s) with 364-day cycle"
        )


@click.command("status")
@click.option("--order", "order_id", required=True, help="Order ID to inspect.")
@click.pass_obj
def dispatch_status(container: Container, order_id: str) -> None:
    """Show ordered, dispatched and remaining quantities for an order."""
    try:
        lines = container.show_dispatch_status().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Order {order_id}")
    click.echo()
    _display_lines(lines)


@click.command("delete")
@click.option("--order", "order_id", required=True, help="Order ID whose dispatch to delete.")
@click.option("--role", envvar="DMS_ROLE", default="user", show_default=True, help="Acting role.")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def dispatch_delete(container: Container, order_id: str, role: str, yes: bool) -> None:
    """Return an order's dispatched devices to stock (admins only)."""
    try:
        acting = Role.parse(role)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not yes:
        click.confirm(
            f"Delete the dispatch of order {order_id} and restore its stock?",
            abort=True,
        )

    try:
        result = container.delete_dispatch().handle(order_id, acting)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    click.echo(f"Shipments deleted: {result.shipments_deleted}")
    if result.renewals_retained:
        click.secho(
            f"Note: {result.renewals_retained} renewal record(s) for this order "
            "remain active.",
            fg="yellow",
        )


@click.command("show")
@click.option("--order", "order_id", required=True, help="Order ID to inspect.")
@click.pass_obj
def dispatch_show(container: Container, order_id: str) -> None:
    """List the devices and shipments already dispatched for an order."""
    try:
        history = container.show_dispatched_devices().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "complete" if history.is_complete else f"{history.remaining} remaining"
    click.echo(
        f"Order {history.order_id}  ({history.customer_name or 'no customer'})  "
        f"{history.total_items - history.remaining}/{history.total_items} dispatched, {state}"
    )
    click.echo()
    if not history.devices:
        click.echo("No devices dispatched.")
    else:
        click.echo(f"  {'Serial':<18} {'Product':<24} {'Category':<18} {'Date':<10}")
        click.echo(f"  {'-'*72}")
        for d in history.devices:
            click.echo(
                f"  {d.serial_number:<18} {d.product_name:<24} {d.category:<18} "
                f"{d.dispatch_date or 'Unknown':<10}"
            )
    click.echo()
    for s in history.shipments:
        tracking = s.tracking_id or "no tracking"
        click.echo(
            f"  Shipment #{s.id}  {s.shipment_type}  {s.courier_partner or '-'} / "
            f"{s.shipping_mode or '-'}  {tracking}"
        )
        if s.notes:
            click.echo(f"    Notes: {s.notes}")


@click.command("resend-email")
@click.option("--order", "order_id", required=True, help="Order ID whose email to resend.")
@click.pass_obj
def dispatch_resend_email(container: Container, order_id: str) -> None:
    """Queue the dispatch email for an order again."""
    try:
        email = container.resend_dispatch_email().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(
        f"Dispatch email queued for order {email.order_id} "
        f"({email.total_quantity} item(s))"
    )


@click.command("track")
@click.option("--shipment", "shipment_id", type=int, required=True, help="Shipment ID.")
@click.option("--courier", required=True, help="Courier partner.")
@click.option("--mode", required=True, help="Courier mode, e.g. Surface or Air.")
@click.option("--tracking-id", required=True, help="Courier tracking / AWB number.")
@click.option("--weight", default=None, help="Parcel weight in kg.")
@click.option("--cost", default=None, help="Shipping cost in rupees.")
@click.pass_obj
def dispatch_track(
    container: Container,
    shipment_id: int,
    courier: str,
    mode: str,
    tracking_id: str,
    weight: str | None,
    cost: str | None,
) -> None:
    """Record or update courier tracking details on a shipment."""
    try:
        shipment = container.update_tracking().handle(
            shipment_id, courier, mode, tracking_id, weight_kg=weight, shipping_cost=cost
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(
        f"Tracking details updated for shipment #{shipment.id}: "
        f"{shipment.courier_partner} {shipment.tracking_id}"
    )
