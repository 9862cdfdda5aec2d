"""Application service: Delete Product use case.

Deletion is soft: the record stays so cancelled orders can still be
restocked, while the catalog, carts and checkout treat it as gone.
"""

from __future__ import annotations

import logging

from storefront.application.product_edit import DEFAULT_MAX_ATTEMPTS, edit_product
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._product_repo = product_repo
        self._max_attempts = max(1, max_attempts)

    def handle(self, caller: Caller, product_id: str) -> None:
        caller.require_admin()
        edit_product(
            self._product_repo,
            product_id,
            Product.mark_deleted,
            max_attempts=self._max_attempts,
        )
        logger.info("Product %s deleted by %s", product_id, caller.user_id)
