"""Authenticated caller resolved from a bearer token."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identity of the caller, set by the authentication dependency."""

    user_id: int
    email: str | None = None
