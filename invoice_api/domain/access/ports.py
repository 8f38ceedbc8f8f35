"""
Port interfaces (ABCs) for the access bounded context.

The pipeline only needs two things from the outside world:
resolving a user id to an identity, and issuing/verifying tokens.
"""

from abc import ABC, abstractmethod
from typing import Optional

from invoice_api.domain.access.entities import Identity, TokenClaims


class IdentityLookupPort(ABC):
    """Port for resolving a token subject to a current identity."""

    @abstractmethod
    def find_identity(self, user_id: int) -> Optional[Identity]:
        """Return the identity for a user id, or None if the user does not exist."""
        raise NotImplementedError


class TokenPort(ABC):
    """Port for issuing and verifying signed bearer tokens."""

    @abstractmethod
    def issue(self, identity: Identity) -> str:
        """Return a signed token embedding the identity and an expiry."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry and return the embedded claims.

        Raises:
            ExpiredCredentialError: The token is past its expiry.
            InvalidCredentialError: The token is malformed or forged.
        """
        raise NotImplementedError
