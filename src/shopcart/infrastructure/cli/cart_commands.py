"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from shopcart.application.add_to_cart import AddToCartHandler
from shopcart.application.change_quantity import ChangeQuantityHandler
from shopcart.application.dto import CartDTO
from shopcart.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from shopcart.application.show_cart import ShowCartHandler
from shopcart.domain.exceptions import DomainException, StorageError
from shopcart.infrastructure.bootstrap import cart_store, price_lookup, product_repository

_user_option = click.option("--user", "user_id", required=True, help="User ID.")
_product_option = click.option("--product", "product_id", required=True, help="Product ID.")


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart of user {dto.user_id}")
    if dto.is_empty:
        click.echo("  (empty)")
        return

    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Amount':>12}")
    click.echo(f"  {'-'*46}")
    for line in dto.items:
        click.echo(
            f"  {line.product_id:<6} {line.product_name:<20} {line.quantity:>5} {line.amount:>12}"
        )
    click.echo(f"  {'-'*46}")
    click.echo(f"  {'Items':<27} {dto.item_count:>5}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>18}")


def _change_quantity_handler() -> ChangeQuantityHandler:
    return ChangeQuantityHandler(
        store=cart_store(),
        price_lookup=price_lookup(),
        product_repo=product_repository(),
    )


@click.command("add")
@_user_option
@_product_option
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart (merges with an existing line)."""
    try:
        handler = AddToCartHandler(
            store=cart_store(),
            price_lookup=price_lookup(),
            product_repo=product_repository(),
        )
        dto = handler.handle(user_id, product_id, quantity)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("inc")
@_user_option
@_product_option
def cart_inc(user_id: str, product_id: str) -> None:
    """Add one unit of a product already in the cart."""
    try:
        dto = _change_quantity_handler().increment(user_id, product_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("dec")
@_user_option
@_product_option
def cart_dec(user_id: str, product_id: str) -> None:
    """Remove one unit; the last unit removes the line."""
    try:
        dto = _change_quantity_handler().decrement(user_id, product_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("set")
@_user_option
@_product_option
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_set(user_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    try:
        dto = _change_quantity_handler().set_quantity(user_id, product_id, quantity)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@_user_option
@_product_option
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a product from the cart."""
    try:
        handler = RemoveFromCartHandler(store=cart_store(), product_repo=product_repository())
        dto = handler.handle(user_id, product_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@_user_option
def cart_clear(user_id: str) -> None:
    """Remove every product from the cart."""
    try:
        ClearCartHandler(store=cart_store()).handle(user_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart of user {user_id} cleared.")


@click.command("show")
@_user_option
def cart_show(user_id: str) -> None:
    """Show the cart with line amounts and total."""
    try:
        handler = ShowCartHandler(store=cart_store(), product_repo=product_repository())
        dto = handler.handle(user_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)
