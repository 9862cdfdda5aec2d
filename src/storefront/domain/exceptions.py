"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Errors flagged ``retriable`` are transient (a lost race or an unreachable
store); the caller may repeat the same request.  Everything else is terminal
for that request.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    retriable = False


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnauthorizedError(DomainException):
    """The caller's role or ownership does not permit the operation."""


class EmptyCartError(DomainException):
    """Checkout was requested for a cart with nothing to order."""


class InvalidTransitionError(DomainException):
    """An order status change outside the allowed lifecycle graph."""


class InsufficientStockError(DomainException):
    """Stock is below the requested quantity at decrement time.

    Carries the blocking ``product_id`` so clients can point at the
    offending cart line.
    """

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(need {requested}, have {available})"
        )


class ConcurrentModificationError(DomainException):
    """A conditional write lost a race against another writer."""

    retriable = True


class StoreTimeoutError(DomainException):
    """The backing store could not be reached within the configured bound."""

    retriable = True


class DuplicateIdempotencyKeyError(DomainException):
    """An order was already placed with this idempotency key."""

    def __init__(self, user_id: str, key: str) -> None:
        self.user_id = user_id
        self.key = key
        super().__init__(f"Idempotency key '{key}' already used by {user_id}")
