"""Unit tests for caller capability checks."""

import pytest

from storefront.domain.exceptions import UnauthorizedError, ValidationError
from storefront.domain.model.identity import Caller, Role


class TestCaller:

    def test_default_role_is_user(self):
        assert Caller("alice").role is Role.USER

    def test_blank_user_rejected(self):
        with pytest.raises(ValidationError):
            Caller(" ")

    def test_user_cannot_act_as_admin(self):
        with pytest.raises(UnauthorizedError, match="admin"):
            Caller("alice").require_admin()

    def test_admin_passes(self):
        Caller("root", Role.ADMIN).require_admin()

    def test_owner_check(self):
        Caller("alice").require_owner_or_admin("alice")
        Caller("root", Role.ADMIN).require_owner_or_admin("alice")
        with pytest.raises(UnauthorizedError):
            Caller("bob").require_owner_or_admin("alice")
