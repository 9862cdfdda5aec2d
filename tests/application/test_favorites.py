"""Tests for the favorites use cases."""

import pytest

from storefront.application.show_favorites import IsFavoriteHandler, ListFavoritesHandler
from storefront.application.toggle_favorite import ToggleFavoriteHandler
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeFavoritesRepository, FakeProductRepository

ALICE = Caller("alice")
BOB = Caller("bob")


@pytest.fixture
def repos():
    product_repo = FakeProductRepository(
        [
            Product(id="p1", name="Mug", price=Money.of("9.99"), stock=10),
            Product(id="p2", name="Tee", price=Money.of("15.00"), stock=5),
        ]
    )
    return FakeFavoritesRepository(), product_repo


class TestToggleFavorite:

    def test_toggle_on_and_off(self, repos):
        favorites_repo, product_repo = repos
        handler = ToggleFavoriteHandler(favorites_repo, product_repo)

        assert handler.handle(ALICE, "p1") is True
        assert IsFavoriteHandler(favorites_repo).handle(ALICE, "p1") is True
        assert handler.handle(ALICE, "p1") is False
        assert IsFavoriteHandler(favorites_repo).handle(ALICE, "p1") is False

    def test_favorites_are_per_user(self, repos):
        favorites_repo, product_repo = repos
        ToggleFavoriteHandler(favorites_repo, product_repo).handle(ALICE, "p1")

        assert IsFavoriteHandler(favorites_repo).handle(BOB, "p1") is False

    def test_unknown_product_cannot_be_favorited(self, repos):
        favorites_repo, product_repo = repos
        with pytest.raises(EntityNotFoundError):
            ToggleFavoriteHandler(favorites_repo, product_repo).handle(ALICE, "nope")

    def test_deleted_product_can_still_be_unfavorited(self, repos):
        favorites_repo, product_repo = repos
        handler = ToggleFavoriteHandler(favorites_repo, product_repo)
        handler.handle(ALICE, "p1")

        mug = product_repo.get_by_id("p1")
        mug.mark_deleted()
        product_repo.save(mug)

        assert handler.handle(ALICE, "p1") is False


class TestListFavorites:

    def test_lists_live_favorites(self, repos):
        favorites_repo, product_repo = repos
        handler = ToggleFavoriteHandler(favorites_repo, product_repo)
        handler.handle(ALICE, "p1")
        handler.handle(ALICE, "p2")

        tee = product_repo.get_by_id("p2")
        tee.mark_deleted()
        product_repo.save(tee)

        names = [p.name for p in ListFavoritesHandler(favorites_repo, product_repo).handle(ALICE)]
        assert names == ["Mug"]

    def test_empty(self, repos):
        favorites_repo, product_repo = repos
        assert ListFavoritesHandler(favorites_repo, product_repo).handle(ALICE) == []
