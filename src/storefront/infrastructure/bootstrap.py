"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_favorites_repository import (
    JsonFavoritesRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.settings import Settings, load_settings


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    cfg = settings()
    return JsonProductRepository(cfg.data_dir / "products.json", cfg.store_timeout)


def cart_repository() -> JsonCartRepository:
    cfg = settings()
    return JsonCartRepository(cfg.data_dir / "carts.json", cfg.store_timeout)


def order_repository() -> JsonOrderRepository:
    cfg = settings()
    return JsonOrderRepository(cfg.data_dir / "orders.json", cfg.store_timeout)


def favorites_repository() -> JsonFavoritesRepository:
    cfg = settings()
    return JsonFavoritesRepository(cfg.data_dir / "favorites.json", cfg.store_timeout)
