"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from shopcart.application.add_product import AddProductHandler
from shopcart.application.update_product import UpdateProductHandler
from shopcart.domain.exceptions import DomainException, StorageError
from shopcart.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--discount", default=None, help="Discount per unit (e.g. 2.50).")
def product_add(name: str, price: str, discount: str | None) -> None:
    """Add a new product to the catalog."""
    try:
        handler = AddProductHandler(product_repo=product_repository())
        product = handler.handle(name=name, price=price, discount=discount)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.discounted_price}"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except StorageError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Discount':>10} {'Net':>10}")
    click.echo("-" * 60)
    for p in products:
        discount = str(p.discount) if p.discount is not None else "-"
        click.echo(
            f"{p.id:<6} {p.name:<20} {str(p.price):>10} {discount:>10} "
            f"{str(p.discounted_price):>10}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--discount", default=None, help="New discount per unit.")
@click.option("--no-discount", "clear_discount", is_flag=True, default=False, help="Remove the discount.")
def product_update(
    product_id: str, price: str, discount: str | None, clear_discount: bool
) -> None:
    """Update a product's price (existing cart lines are repriced on next change)."""
    try:
        handler = UpdateProductHandler(product_repo=product_repository())
        product = handler.handle(
            product_id=product_id,
            new_price=price,
            new_discount=discount,
            clear_discount=clear_discount,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} price updated to {product.price} "
        f"(net {product.discounted_price})"
    )
