"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from storefront.application.product_edit import DEFAULT_MAX_ATTEMPTS, edit_product
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product, ProductPatch
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._product_repo = product_repo
        self._max_attempts = max(1, max_attempts)

    def handle(self, caller: Caller, product_id: str, patch: ProductPatch) -> Product:
        """Apply *patch* to a product (admin only).

        Existing orders are unaffected; they captured a snapshot at
        checkout time.
        """
        caller.require_admin()
        if patch.is_empty:
            raise ValidationError("Nothing to update")

        product = edit_product(
            self._product_repo,
            product_id,
            lambda p: p.apply(patch),
            max_attempts=self._max_attempts,
        )
        logger.info("Product %s updated by %s", product_id, caller.user_id)
        return product
