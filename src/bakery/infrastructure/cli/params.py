"""Shared click parameter types and output helpers."""

from __future__ import annotations

from datetime import datetime

import click

from bakery.application.dto import MAX_PAGE_SIZE, Page, ProductDTO, SaleDTO


class IsoTimestamp(click.ParamType):
    """ISO-8601 timestamp; a trailing ``Z`` means UTC, naive means UTC."""

    name = "timestamp"

    def convert(self, value, param, ctx) -> datetime:
        if isinstance(value, datetime):
            return value
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            self.fail(f"'{value}' is not an ISO-8601 timestamp", param, ctx)


ISO_TIMESTAMP = IsoTimestamp()

page_option = click.option(
    "--page", default=1, show_default=True, type=click.IntRange(min=1), help="Page number."
)
limit_option = click.option(
    "--limit",
    default=20,
    show_default=True,
    type=click.IntRange(1, MAX_PAGE_SIZE),
    help="Items per page.",
)


def echo_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}")
    click.echo(f"  Name:       {dto.name}")
    click.echo(f"  Price:      {dto.price}")
    click.echo(f"  Stock:      {dto.total_stock}")
    click.echo(f"  Sold:       {dto.sold_quantity}")
    click.echo(f"  Remaining:  {dto.remaining_stock}")
    if dto.image_path:
        click.echo(f"  Image:      {dto.image_path}")
    if dto.deleted_at:
        click.echo(f"  Deleted at: {dto.deleted_at}")


def echo_sale(dto: SaleDTO) -> None:
    click.echo(f"Sale {dto.id}")
    click.echo(f"  Product:    {dto.product_name} ({dto.product_id})")
    click.echo(f"  Quantity:   {dto.quantity}")
    click.echo(f"  Unit price: {dto.unit_price}")
    click.echo(f"  Total:      {dto.total_amount}")
    click.echo(f"  Sold at:    {dto.sold_at}")


def echo_page_footer(page: Page, page_number: int) -> None:
    click.echo(f"Page {page_number}: {len(page.items)} of {page.total}")
