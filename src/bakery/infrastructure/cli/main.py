import logging

import click

from bakery.application.seed_catalog import SeedCatalogHandler
from bakery.domain.exceptions import DomainException
from bakery.infrastructure.bootstrap import product_repository
from bakery.infrastructure.cli.product_commands import (
    product_create,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from bakery.infrastructure.cli.sale_commands import sale_list, sale_record
from bakery.infrastructure.cli.stats_commands import stats_best_sellers, stats_summary
from bakery.infrastructure.config import settings


@click.group()
@click.option("--log-level", default=None, help="Override BAKERY_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Bakery inventory and sales ledger."""
    logging.basicConfig(
        level=(log_level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def sale() -> None:
    """Record and list sales."""


@cli.group()
def stats() -> None:
    """Inventory and revenue statistics."""


@cli.command("seed")
def seed() -> None:
    """Load the starter bakery products."""
    handler = SeedCatalogHandler(product_repo=product_repository())

    try:
        added = handler.handle(image_base=settings.SEED_IMAGE_BASE)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if added:
        click.echo(f"Seeded {added} products")
    else:
        click.echo("Seed skipped: all products already exist")


# Register subcommands
product.add_command(product_create)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
sale.add_command(sale_list)
sale.add_command(sale_record)
stats.add_command(stats_best_sellers)
stats.add_command(stats_summary)
