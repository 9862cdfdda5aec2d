"""Application service: Add Product use case."""

from __future__ import annotations

import logging
import uuid

from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product, ProductSpec
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, caller: Caller, spec: ProductSpec) -> Product:
        """Add a new product to the catalog (admin only)."""
        caller.require_admin()

        product = Product.create(uuid.uuid4().hex, spec)
        self._product_repo.add(product)

        logger.info(
            "Product %s '%s' added by %s (stock=%d)",
            product.id,
            product.name,
            caller.user_id,
            product.stock,
        )
        return product
