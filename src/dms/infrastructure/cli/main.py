from pathlib import Path

import click

from dms.infrastructure.bootstrap import Container
from dms.infrastructure.cli.dispatch_commands import (
    dispatch_create,
    dispatch_delete,
    dispatch_resend_email,
    dispatch_show,
    dispatch_status,
    dispatch_track,
)
from dms.infrastructure.cli.product_commands import product_add, product_list
from dms.infrastructure.cli.renewal_commands import renewal_list
from dms.infrastructure.cli.stock_commands import stock_add, stock_show
from dms.infrastructure.logging_setup import configure_logging

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--data-dir",
    envvar="DMS_DATA_DIR",
    default="data",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the JSON data files.",
)
@click.option(
    "--log-level",
    envvar="DMS_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str) -> None:
    """DMS — Dispatch Management System"""
    configure_logging(log_level)
    ctx.obj = Container(data_dir)


@cli.group()
def dispatch() -> None:
    """Scan, confirm and reverse dispatches."""


@cli.group()
def stock() -> None:
    """Manage serial-numbered stock."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def renewal() -> None:
    """Inspect service renewals."""


# Register subcommands
dispatch.add_command(dispatch_create)
dispatch.add_command(dispatch_delete)
dispatch.add_command(dispatch_status)
dispatch.add_command(dispatch_show)
dispatch.add_command(dispatch_resend_email)
dispatch.add_command(dispatch_track)
stock.add_command(stock_add)
stock.add_command(stock_show)
product.add_command(product_add)
product.add_command(product_list)
renewal.add_command(renewal_list)
