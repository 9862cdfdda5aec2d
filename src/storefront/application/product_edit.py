"""Versioned read-modify-save for catalog edits.

The save is conditional on the version that was read, so an admin edit
racing a checkout never writes back a stale stock figure.  On a lost
race the edit is re-applied to a fresh read, a bounded number of times.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.domain.exceptions import ConcurrentModificationError, EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


def edit_product(
    product_repo: ProductRepository,
    product_id: str,
    mutate: Callable[[Product], None],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Product:
    attempt = 1
    while True:
        product = product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        mutate(product)
        try:
            product_repo.save(product)
        except ConcurrentModificationError:
            if attempt >= max_attempts:
                raise
            logger.debug(
                "Product %s changed underneath edit (attempt %d), retrying",
                product_id,
                attempt,
            )
            attempt += 1
            continue
        return product
