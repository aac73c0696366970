"""CLI commands for service renewals."""

from __future__ import annotations

import click

from dms.domain.exceptions import DomainException
from dms.infrastructure.bootstrap import Container


@click.command("list")
@click.pass_obj
def renewal_list(container: Container) -> None:
    """List renewals, soonest expiry first."""
    try:
        renewals = container.show_renewals().handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not renewals:
        click.echo("No renewals found.")
        return

    click.echo(
        f"{'Order':<12} {'Service':<16} {'Start':<12} {'End':<12} {'Days':>6} {'Status':<14}"
    )
    click.echo("-" * 76)
    for r in renewals:
        click.echo(
            f"{r.order_id:<12} {r.product_type:<16} {r.renewal_start_date:<12} "
            f"{r.renewal_end_date:<12} {r.days_remaining:>6} {r.status:<14}"
        )
