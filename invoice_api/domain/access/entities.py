"""
Domain entities for the access bounded context.

Roles, capabilities and the per-request identity.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from enum import Enum


class Capability(Enum):
    """Permission level a route requires."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


class Role(Enum):
    """Role held by a user account."""

    USER = "user"
    ADMIN = "admin"

    def grants(self, capability: Capability) -> bool:
        """Return True if this role satisfies the given capability."""
        return capability in _ROLE_CAPABILITIES[self]


_ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.USER: frozenset({Capability.PUBLIC, Capability.AUTHENTICATED}),
    Role.ADMIN: frozenset(Capability),
}


@dataclass(frozen=True)
class Identity:
    """The authenticated caller attached to a request.

    Built by the authenticator for each request and never persisted.
    """

    user_id: int
    role: Role
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    user_id: int
    role: Role
    issued_at: int
    expires_at: int
