"""Identity options shared by every CLI command.

The CLI stands in for the trusted transport: whoever runs it asserts the
already-verified user id and role claim.
"""

from __future__ import annotations

import functools

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Caller, Role


def with_caller(func):
    """Add ``--user``/``--role`` and pass a ``caller`` to the command."""

    @click.option("--user", "user_id", required=True, help="Verified user ID.")
    @click.option(
        "--role",
        type=click.Choice([r.value for r in Role]),
        default=Role.USER.value,
        show_default=True,
        help="Verified role claim.",
    )
    @functools.wraps(func)
    def wrapper(*args, user_id: str, role: str, **kwargs):
        try:
            caller = Caller(user_id=user_id, role=Role(role))
        except DomainException as exc:
            raise click.BadParameter(str(exc), param_hint="--user")
        return func(*args, caller=caller, **kwargs)

    return wrapper
