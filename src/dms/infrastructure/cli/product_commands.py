"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from dms.domain.exceptions import DomainException
from dms.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", default=None, help="Catalog category.")
@click.option(
    "--type",
    "product_type",
    type=click.Choice(["physical", "service"], case_sensitive=False),
    default="physical",
    show_default=True,
)
@click.pass_obj
def product_add(
    container: Container, name: str, category: str | None, product_type: str
) -> None:
    """Add a new product to the catalog."""
    try:
        product = container.add_product().handle(
            name=name, category=category, product_type=product_type
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' added ({product.product_type.value})")


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products in the catalog."""
    try:
        products = container.product_repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Name':<24} {'Category':<20} {'Type':<10}")
    click.echo("-" * 56)
    for p in products:
        click.echo(
            f"{p.name:<24} {p.category or 'Uncategorized':<20} {p.product_type.value:<10}"
        )
