from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """The user a request acts on behalf of.

    Resolved by ``require_user`` from the bearer token (or from
    LEGACY_USER_ID when AUTH_MODE=legacy) and passed to handlers.
    """

    user_id: int
