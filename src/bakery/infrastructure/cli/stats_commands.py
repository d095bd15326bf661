"""CLI commands for inventory and revenue statistics."""

from __future__ import annotations

from datetime import datetime

import click

from bakery.application.dto import BestSellerDTO
from bakery.application.show_stats import ShowBestSellersHandler, ShowSummaryHandler
from bakery.domain.exceptions import DomainException
from bakery.infrastructure.bootstrap import product_repository, sale_repository
from bakery.infrastructure.cli.params import ISO_TIMESTAMP


@click.command("summary")
def stats_summary() -> None:
    """Show catalog-wide stock totals."""
    handler = ShowSummaryHandler(
        product_repo=product_repository(), sale_repo=sale_repository()
    )

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:        {dto.total_products}")
    click.echo(f"Total stock:     {dto.total_stock}")
    click.echo(f"Sold:            {dto.total_sold_quantity}")
    click.echo(f"Remaining stock: {dto.total_remaining_stock}")


def _echo_best(label: str, best: BestSellerDTO | None) -> None:
    if best is None:
        click.echo(f"{label}: none")
        return
    click.echo(
        f"{label}: {best.name} ({best.product_id}): "
        f"{best.sold_quantity} sold, revenue {best.total_revenue}, price now {best.price}"
    )


@click.command("best-sellers")
@click.option("--from", "sold_from", type=ISO_TIMESTAMP, default=None, help="Window start (inclusive).")
@click.option("--to", "sold_to", type=ISO_TIMESTAMP, default=None, help="Window end (inclusive).")
def stats_best_sellers(sold_from: datetime | None, sold_to: datetime | None) -> None:
    """Show the best-selling products by quantity and by revenue."""
    handler = ShowBestSellersHandler(
        product_repo=product_repository(), sale_repo=sale_repository()
    )

    try:
        dto = handler.handle(sold_from=sold_from, sold_to=sold_to)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_best("Best by quantity", dto.best_by_quantity)
    _echo_best("Best by revenue", dto.best_by_revenue)
