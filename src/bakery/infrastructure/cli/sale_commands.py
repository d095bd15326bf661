"""CLI commands for the sale ledger."""

from __future__ import annotations

from datetime import datetime

import click

from bakery.application.dto import PageRequest
from bakery.application.list_sales import ListSalesHandler, SaleFilter
from bakery.application.record_sale import RecordSaleHandler
from bakery.domain.exceptions import DomainException
from bakery.infrastructure.bootstrap import (
    product_locks,
    product_repository,
    sale_repository,
)
from bakery.infrastructure.cli.params import (
    ISO_TIMESTAMP,
    echo_page_footer,
    echo_sale,
    limit_option,
    page_option,
)


@click.command("record")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
def sale_record(product_id: str, quantity: int) -> None:
    """Record a sale against a product's remaining stock."""
    handler = RecordSaleHandler(
        product_repo=product_repository(),
        sale_repo=sale_repository(),
        locks=product_locks(),
    )

    try:
        dto = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_sale(dto)


@click.command("list")
@click.option("--product-id", default=None, help="Only sales of this product.")
@click.option("--from", "sold_from", type=ISO_TIMESTAMP, default=None, help="Earliest sale time (inclusive).")
@click.option("--to", "sold_to", type=ISO_TIMESTAMP, default=None, help="Latest sale time (inclusive).")
@page_option
@limit_option
def sale_list(
    product_id: str | None,
    sold_from: datetime | None,
    sold_to: datetime | None,
    page: int,
    limit: int,
) -> None:
    """List sales, newest first."""
    handler = ListSalesHandler(sale_repo=sale_repository())
    criteria = SaleFilter(product_id=product_id, sold_from=sold_from, sold_to=sold_to)

    try:
        result = handler.handle(criteria, PageRequest(page=page, limit=limit))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.total:
        click.echo("No sales found.")
        return

    click.echo(f"{'Sold at':<32} {'Product':<24} {'Qty':>5} {'Price':>8} {'Total':>10}")
    click.echo("-" * 83)
    for s in result.items:
        click.echo(
            f"{s.sold_at:<32} {s.product_name:<24} {s.quantity:>5} "
            f"{s.unit_price:>8} {s.total_amount:>10}"
        )
    echo_page_footer(result, page)
