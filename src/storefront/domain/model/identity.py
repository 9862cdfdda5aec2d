"""Caller identity as handed over by the external identity provider.

The provider has already verified the user id and role claim; the domain
only needs a typed capability check at the service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import UnauthorizedError, ValidationError


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role = Role.USER

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValidationError("Caller user id is required")

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def require_admin(self) -> None:
        if not self.is_admin:
            raise UnauthorizedError(
                f"User '{self.user_id}' is not allowed to perform admin operations"
            )

    def require_owner_or_admin(self, owner_id: str) -> None:
        if self.user_id != owner_id and not self.is_admin:
            raise UnauthorizedError(
                f"User '{self.user_id}' cannot access data owned by '{owner_id}'"
            )
