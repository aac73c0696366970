"""CLI commands for the stock ledger."""

from __future__ import annotations

import click

from dms.domain.exceptions import DomainException
from dms.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--serial", required=True, help="Serial number of the unit.")
@click.option("--product", required=True, help="Product name.")
@click.pass_obj
def stock_add(container: Container, serial: str, product: str) -> None:
    """Add a serial-numbered unit to stock."""
    try:
        item = container.add_stock().handle(serial_number=serial, product_name=product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {item.serial_number} ({item.product_name}) — {item.status.value}")


@click.command("show")
@click.pass_obj
def stock_show(container: Container) -> None:
    """Show stock levels per product."""
    try:
        lines = container.show_stock().handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Product':<24} {'In Stock':>10} {'Dispatched':>12}")
    click.echo("-" * 48)
    for line in lines:
        click.echo(f"{line.product_name:<24} {line.in_stock:>10} {line.dispatched:>12}")
