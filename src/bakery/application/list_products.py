"""Application service: List Products use case (query)."""

from __future__ import annotations

from bakery.application.dto import Page, PageRequest, ProductDTO, product_to_dto
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.stock_read_model import StockReadModel


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._read_model = StockReadModel(product_repo, sale_repo)

    def handle(self, page: PageRequest) -> Page[ProductDTO]:
        """Return one page of the catalog, ordered by name."""
        levels = self._read_model.list_active()
        return Page(
            items=[product_to_dto(level) for level in page.slice(levels)],
            total=len(levels),
        )
