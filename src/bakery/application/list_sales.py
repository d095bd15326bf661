"""Application service: List Sales use case (query)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bakery.application.dto import Page, PageRequest, SaleDTO, sale_to_dto, to_utc
from bakery.domain.exceptions import ValidationError
from bakery.domain.repository.sale_repository import SaleRepository


@dataclass(frozen=True)
class SaleFilter:
    product_id: str | None = None
    sold_from: datetime | None = None
    sold_to: datetime | None = None


class ListSalesHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, criteria: SaleFilter, page: PageRequest) -> Page[SaleDTO]:
        """Return one page of the ledger, newest sale first."""
        sold_from = to_utc(criteria.sold_from)
        sold_to = to_utc(criteria.sold_to)
        if sold_from is not None and sold_to is not None and sold_from > sold_to:
            raise ValidationError("'from' must not be later than 'to'")

        sales = self._sale_repo.find(
            product_id=criteria.product_id,
            sold_from=sold_from,
            sold_to=sold_to,
        )
        return Page(
            items=[sale_to_dto(sale) for sale in page.slice(sales)],
            total=len(sales),
        )
