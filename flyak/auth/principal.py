"""Authenticated-session values handed to the token service.

``Authentication`` is what an upstream login flow produces once the
credentials check out. The token service only looks at
``authentication.principal``.
"""

from dataclasses import dataclass

from flyak.models.user import User


@dataclass(frozen=True)
class UserDetails:
    """Wraps the authenticated ``User``."""

    user: User

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.name

    @property
    def authorities(self) -> list[str]:
        return list(self.user.roles or [])


@dataclass(frozen=True)
class Authentication:
    """A completed authentication for a single principal."""

    principal: UserDetails
    authenticated: bool = True
