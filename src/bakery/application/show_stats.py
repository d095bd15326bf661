"""Application services: stats queries (summary and best sellers)."""

from __future__ import annotations

from datetime import datetime

from bakery.application.dto import BestSellerDTO, BestSellersDTO, SummaryDTO, to_utc
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.stats_engine import BestSeller, StatsEngine


class ShowSummaryHandler:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._engine = StatsEngine(product_repo, sale_repo)

    def handle(self) -> SummaryDTO:
        summary = self._engine.summary()
        return SummaryDTO(
            total_products=summary.total_products,
            total_stock=summary.total_stock,
            total_sold_quantity=summary.total_sold_quantity,
            total_remaining_stock=summary.total_remaining_stock,
        )


class ShowBestSellersHandler:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._engine = StatsEngine(product_repo, sale_repo)

    def handle(
        self,
        sold_from: datetime | None = None,
        sold_to: datetime | None = None,
    ) -> BestSellersDTO:
        best = self._engine.best_sellers(to_utc(sold_from), to_utc(sold_to))
        return BestSellersDTO(
            best_by_quantity=self._to_dto(best.by_quantity),
            best_by_revenue=self._to_dto(best.by_revenue),
        )

    @staticmethod
    def _to_dto(best: BestSeller | None) -> BestSellerDTO | None:
        if best is None:
            return None
        return BestSellerDTO(
            product_id=best.product.id,
            name=best.product.name,
            price=str(best.product.price),
            sold_quantity=best.sold_quantity,
            total_revenue=str(best.revenue),
        )
