"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from bakery.application.create_product import CreateProductHandler
from bakery.application.delete_product import DeleteProductHandler
from bakery.application.dto import PageRequest, ProductChanges
from bakery.application.list_products import ListProductsHandler
from bakery.application.show_product import ShowProductHandler
from bakery.application.update_product import UpdateProductHandler
from bakery.domain.exceptions import DomainException
from bakery.infrastructure.bootstrap import (
    product_locks,
    product_repository,
    sale_repository,
)
from bakery.infrastructure.cli.params import (
    echo_page_footer,
    echo_product,
    limit_option,
    page_option,
)


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 4.50).")
@click.option("--stock", "total_stock", required=True, type=int, help="Total stock made available.")
@click.option("--image", "image_path", default=None, help="Opaque image reference.")
def product_create(name: str, price: str, total_stock: int, image_path: str | None) -> None:
    """Add a new product to the catalog."""
    handler = CreateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            name=name, price=price, total_stock=total_stock, image_path=image_path
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 3.99).")
@click.option("--stock", "total_stock", default=None, type=int, help="New total stock.")
@click.option("--image", "image_path", default=None, help="New image reference.")
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    total_stock: int | None,
    image_path: str | None,
) -> None:
    """Update some fields of a product."""
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        sale_repo=sale_repository(),
        locks=product_locks(),
    )
    changes = ProductChanges(
        name=name, price=price, total_stock=total_stock, image_path=image_path
    )

    try:
        dto = handler.handle(product_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_product(dto)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--include-deleted", is_flag=True, default=False, help="Also resolve deleted products.")
def product_show(product_id: str, include_deleted: bool) -> None:
    """Show a product with its sold and remaining stock."""
    handler = ShowProductHandler(
        product_repo=product_repository(), sale_repo=sale_repository()
    )

    try:
        dto = handler.handle(product_id, include_deleted=include_deleted)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_product(dto)


@click.command("list")
@page_option
@limit_option
def product_list(page: int, limit: int) -> None:
    """List products in the catalog, by name."""
    handler = ListProductsHandler(
        product_repo=product_repository(), sale_repo=sale_repository()
    )

    try:
        result = handler.handle(PageRequest(page=page, limit=limit))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.total:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36} {'Name':<24} {'Price':>8} {'Stock':>7} {'Sold':>7} {'Left':>7}")
    click.echo("-" * 94)
    for p in result.items:
        click.echo(
            f"{p.id:<36} {p.name:<24} {p.price:>8} {p.total_stock:>7} "
            f"{p.sold_quantity:>7} {p.remaining_stock:>7}"
        )
    echo_page_footer(result, page)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog (its sales are kept)."""
    handler = DeleteProductHandler(
        product_repo=product_repository(), locks=product_locks()
    )

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
