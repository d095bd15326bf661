"""End-to-end tests for the click CLI against a temporary data directory."""

import json
import os
import re
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from bakery.domain.model.product import Product
from bakery.domain.model.value_objects import Money
from bakery.infrastructure.cli.main import cli
from bakery.infrastructure.config import settings
from bakery.infrastructure.persistence.json_product_repository import JsonProductRepository
from bakery.infrastructure.persistence.json_sale_repository import JsonSaleRepository

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    return CliRunner()


def _create(runner, name="Sourdough Loaf", price="4.50", stock="5") -> str:
    result = runner.invoke(
        cli, ["product", "create", "--name", name, "--price", price, "--stock", stock]
    )
    assert result.exit_code == 0, result.output
    return re.search(r"Product (\S+)", result.output).group(1)


class TestProductCommands:

    def test_create_and_show(self, runner):
        product_id = _create(runner)

        result = runner.invoke(cli, ["product", "show", "--id", product_id])
        assert result.exit_code == 0
        assert "Sourdough Loaf" in result.output
        assert "Remaining:  5" in result.output

    def test_update_conflict_exits_with_error(self, runner):
        product_id = _create(runner)
        runner.invoke(cli, ["sale", "record", "--product-id", product_id, "--quantity", "3"])

        result = runner.invoke(cli, ["product", "update", "--id", product_id, "--stock", "1"])
        assert result.exit_code == 1
        assert "3 already sold" in result.output

    def test_list_and_delete(self, runner):
        keep = _create(runner, name="Bagel")
        drop = _create(runner, name="Stollen")

        assert runner.invoke(cli, ["product", "delete", "--id", drop]).exit_code == 0

        result = runner.invoke(cli, ["product", "list"])
        assert keep in result.output
        assert drop not in result.output
        assert "1 of 1" in result.output

    def test_list_rejects_oversized_limit(self, runner):
        result = runner.invoke(cli, ["product", "list", "--limit", "101"])
        assert result.exit_code == 2

    def test_seed(self, runner, tmp_path):
        first = runner.invoke(cli, ["seed"])
        second = runner.invoke(cli, ["seed"])

        assert "Seeded 5 products" in first.output
        assert "Seed skipped" in second.output
        assert len(json.loads((tmp_path / "products.json").read_text())) == 5


class TestSaleAndStatsCommands:

    def test_sales_deplete_stock(self, runner):
        product_id = _create(runner)

        ok = runner.invoke(cli, ["sale", "record", "--product-id", product_id, "--quantity", "2"])
        assert ok.exit_code == 0
        assert "Total:      9.00" in ok.output

        too_many = runner.invoke(cli, ["sale", "record", "--product-id", product_id, "--quantity", "4"])
        assert too_many.exit_code == 1
        assert "Insufficient stock" in too_many.output

        summary = runner.invoke(cli, ["stats", "summary"])
        assert "Sold:            2" in summary.output
        assert "Remaining stock: 3" in summary.output

    def test_sale_list_with_window(self, runner):
        product_id = _create(runner)
        runner.invoke(cli, ["sale", "record", "--product-id", product_id, "--quantity", "1"])

        recent = runner.invoke(cli, ["sale", "list", "--from", "2000-01-01T00:00:00Z"])
        assert "Sourdough Loaf" in recent.output

        future = runner.invoke(cli, ["sale", "list", "--from", "2999-01-01T00:00:00Z"])
        assert "No sales found." in future.output

    def test_bad_timestamp_is_usage_error(self, runner):
        result = runner.invoke(cli, ["sale", "list", "--from", "yesterday"])
        assert result.exit_code == 2

    def test_best_sellers(self, runner):
        empty = runner.invoke(cli, ["stats", "best-sellers"])
        assert "Best by quantity: none" in empty.output

        product_id = _create(runner)
        runner.invoke(cli, ["sale", "record", "--product-id", product_id, "--quantity", "2"])

        result = runner.invoke(cli, ["stats", "best-sellers"])
        assert "Best by quantity: Sourdough Loaf" in result.output
        assert "revenue 9.00" in result.output


class TestConcurrentProcesses:

    def test_parallel_sale_commands_never_oversell(self, tmp_path):
        product = Product.create(name="Sourdough Loaf", price=Money.of("4.50"), total_stock=3)
        JsonProductRepository(tmp_path / "products.json").save(product)

        pythonpath = [str(SRC_DIR)]
        if os.environ.get("PYTHONPATH"):
            pythonpath.append(os.environ["PYTHONPATH"])
        env = {**os.environ, "BAKERY_DATA_DIR": str(tmp_path), "PYTHONPATH": os.pathsep.join(pythonpath)}
        command = [
            sys.executable, "-c", "from bakery.infrastructure.cli.main import cli; cli()",
            "sale", "record", "--product-id", product.id, "--quantity", "1",
        ]

        procs = [
            subprocess.Popen(
                command, env=env, cwd=tmp_path,
                stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True,
            )
            for _ in range(12)
        ]
        outcomes = []
        for proc in procs:
            _, err = proc.communicate(timeout=120)
            outcomes.append((proc.returncode, err))

        codes = [code for code, _ in outcomes]
        assert codes.count(0) == 3, outcomes
        assert codes.count(1) == 9, outcomes
        assert all("Insufficient stock" in err for code, err in outcomes if code == 1)
        assert JsonSaleRepository(tmp_path / "sales.json").sold_quantity(product.id) == 3
