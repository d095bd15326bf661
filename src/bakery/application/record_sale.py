"""Application service: Record Sale use case.

Thin wrapper over the admission-control domain service; all stock rules
live there.
"""

from __future__ import annotations

from bakery.application.dto import SaleDTO, sale_to_dto
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.product_locks import ProductLocks
from bakery.domain.service.sale_admission_service import SaleAdmissionService


class RecordSaleHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        locks: ProductLocks,
    ) -> None:
        self._admission = SaleAdmissionService(product_repo, sale_repo, locks)

    def handle(self, product_id: str, quantity: int) -> SaleDTO:
        """Record one sale. Two identical calls record two sales."""
        sale = self._admission.admit(product_id, quantity)
        return sale_to_dto(sale)
