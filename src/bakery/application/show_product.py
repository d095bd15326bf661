"""Application service: Show Product use case (query)."""

from __future__ import annotations

from bakery.application.dto import ProductDTO, product_to_dto
from bakery.domain.exceptions import EntityNotFoundError
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.stock_read_model import StockReadModel


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._read_model = StockReadModel(product_repo, sale_repo)

    def handle(self, product_id: str, include_deleted: bool = False) -> ProductDTO:
        level = self._read_model.get(product_id, include_deleted=include_deleted)
        if level is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_to_dto(level)
