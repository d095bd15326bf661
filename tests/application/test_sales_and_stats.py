"""Integration tests for the sale and stats use cases.

Uses in-memory fake repositories — no file I/O.
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from bakery.application.dto import PageRequest, ProductChanges
from bakery.application.list_sales import ListSalesHandler, SaleFilter
from bakery.application.record_sale import RecordSaleHandler
from bakery.application.seed_catalog import DEFAULT_PRODUCTS, SeedCatalogHandler
from bakery.application.show_stats import ShowBestSellersHandler, ShowSummaryHandler
from bakery.application.update_product import UpdateProductHandler
from bakery.domain.exceptions import ConflictError, InsufficientStockError, ValidationError
from bakery.domain.model.product import Product
from bakery.domain.model.sale import Sale
from bakery.domain.model.value_objects import Money, Quantity
from bakery.domain.service.product_locks import ProductLocks
from bakery.domain.service.stock_read_model import StockReadModel
from tests.fakes import FakeProductRepository, FakeSaleRepository

T0 = datetime(2026, 6, 1, 7, 30, tzinfo=timezone.utc)


def _setup(sales: list[Sale] | None = None):
    products = [
        Product(id="a", name="Cinnamon Roll", price=Money.of("3.00"), total_stock=10),
        Product(id="b", name="Almond Danish", price=Money.of("3.75"), total_stock=20),
    ]
    return FakeProductRepository(products), FakeSaleRepository(sales)


class TestRecordSale:

    def test_returns_sale_dto(self):
        product_repo, sale_repo = _setup()
        handler = RecordSaleHandler(product_repo, sale_repo, ProductLocks())

        dto = handler.handle("a", 4)

        assert dto.product_id == "a"
        assert dto.product_name == "Cinnamon Roll"
        assert dto.quantity == 4
        assert dto.unit_price == "3.00"
        assert dto.total_amount == "12.00"
        assert datetime.fromisoformat(dto.sold_at).utcoffset() == timedelta(0)

    def test_insufficient_stock(self):
        product_repo, sale_repo = _setup()
        handler = RecordSaleHandler(product_repo, sale_repo, ProductLocks())
        with pytest.raises(InsufficientStockError):
            handler.handle("a", 11)


class TestListSales:

    def _sales(self):
        product_repo, _ = _setup()
        roll, danish = product_repo.get_by_id("a"), product_repo.get_by_id("b")
        return [
            Sale.record(roll, Quantity(1), sold_at=T0),
            Sale.record(danish, Quantity(2), sold_at=T0 + timedelta(hours=1)),
            Sale.record(roll, Quantity(3), sold_at=T0 + timedelta(hours=2)),
        ]

    def test_newest_first(self):
        _, sale_repo = _setup(self._sales())
        page = ListSalesHandler(sale_repo).handle(SaleFilter(), PageRequest())
        assert [s.quantity for s in page.items] == [3, 2, 1]
        assert page.total == 3

    def test_filter_by_product(self):
        _, sale_repo = _setup(self._sales())
        page = ListSalesHandler(sale_repo).handle(SaleFilter(product_id="a"), PageRequest())
        assert [s.quantity for s in page.items] == [3, 1]

    def test_filter_by_window_with_naive_timestamps(self):
        _, sale_repo = _setup(self._sales())
        naive_from = (T0 + timedelta(hours=1)).replace(tzinfo=None)
        page = ListSalesHandler(sale_repo).handle(SaleFilter(sold_from=naive_from), PageRequest())
        assert [s.quantity for s in page.items] == [3, 2]

    def test_paginates(self):
        _, sale_repo = _setup(self._sales())
        page = ListSalesHandler(sale_repo).handle(SaleFilter(), PageRequest(page=2, limit=2))
        assert [s.quantity for s in page.items] == [1]
        assert page.total == 3

    def test_inverted_window_rejected(self):
        _, sale_repo = _setup(self._sales())
        with pytest.raises(ValidationError):
            ListSalesHandler(sale_repo).handle(
                SaleFilter(sold_from=T0 + timedelta(days=1), sold_to=T0), PageRequest()
            )


class TestStats:

    def test_summary(self):
        product_repo, sale_repo = _setup()
        handler = RecordSaleHandler(product_repo, sale_repo, ProductLocks())
        handler.handle("a", 4)

        dto = ShowSummaryHandler(product_repo, sale_repo).handle()
        assert (dto.total_products, dto.total_stock, dto.total_sold_quantity, dto.total_remaining_stock) == (
            2, 30, 4, 26
        )

    def test_best_sellers_empty(self):
        product_repo, sale_repo = _setup()
        dto = ShowBestSellersHandler(product_repo, sale_repo).handle()
        assert dto.best_by_quantity is None
        assert dto.best_by_revenue is None

    def test_best_sellers_tie_goes_to_lowest_id(self):
        product_repo, sale_repo = _setup()
        handler = RecordSaleHandler(product_repo, sale_repo, ProductLocks())
        handler.handle("b", 2)
        handler.handle("a", 2)

        dto = ShowBestSellersHandler(product_repo, sale_repo).handle()
        assert dto.best_by_quantity.product_id == "a"
        assert dto.best_by_quantity.name == "Cinnamon Roll"
        assert dto.best_by_quantity.price == "3.00"
        assert dto.best_by_revenue.product_id == "b"
        assert dto.best_by_revenue.total_revenue == "7.50"


class TestSeedCatalog:

    def test_seeds_once(self):
        product_repo = FakeProductRepository()
        handler = SeedCatalogHandler(product_repo)

        assert handler.handle(image_base="cdn/") == len(DEFAULT_PRODUCTS)
        assert handler.handle() == 0
        assert product_repo.get_by_name("Sourdough Loaf").image_path == "cdn/sourdough.jpg"

    def test_skips_existing_names(self):
        existing = Product(id="x", name="Cinnamon Roll", price=Money.of("9"), total_stock=1)
        product_repo = FakeProductRepository([existing])

        assert SeedCatalogHandler(product_repo).handle() == len(DEFAULT_PRODUCTS) - 1
        assert product_repo.get_by_name("Cinnamon Roll").price == Money.of("9")


class TestReadsDuringWrites:

    def test_remaining_stock_never_observed_negative(self):
        product_repo, sale_repo = _setup()
        locks = ProductLocks(timeout=5)
        record = RecordSaleHandler(product_repo, sale_repo, locks)
        resize = UpdateProductHandler(product_repo, sale_repo, locks)
        read_model = StockReadModel(product_repo, sale_repo)
        writers_done = threading.Event()
        observed: list[int] = []

        def sell():
            for _ in range(100):
                try:
                    record.handle("a", 1)
                except InsufficientStockError:
                    pass

        def resize_to_sold():
            # Alternate between zero and two units remaining.
            for _ in range(100):
                for headroom in (0, 2):
                    sold = sale_repo.sold_quantity("a")
                    try:
                        resize.handle("a", ProductChanges(total_stock=sold + headroom))
                    except ConflictError:
                        pass

        def read():
            while True:
                observed.append(read_model.get("a").remaining_stock)
                observed.extend(lvl.remaining_stock for lvl in read_model.list_active())
                if writers_done.is_set():
                    return

        writers = [threading.Thread(target=sell) for _ in range(3)]
        writers.append(threading.Thread(target=resize_to_sold))
        readers = [threading.Thread(target=read) for _ in range(2)]
        for t in readers + writers:
            t.start()
        for t in writers:
            t.join()
        writers_done.set()
        for t in readers:
            t.join()

        assert observed
        assert min(observed) >= 0
        assert sale_repo.sold_quantity("a") <= product_repo.get_by_id("a").total_stock
