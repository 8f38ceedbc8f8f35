"""
Adapter: Identity lookup backed by the user repository.

Implements IdentityLookupPort so the authenticator can resolve a token
subject to the account's current role and active flag.
"""

from typing import Optional

from invoice_api.domain.access.entities import Identity
from invoice_api.domain.access.ports import IdentityLookupPort
from invoice_api.domain.invoicing.ports import UserRepository


class UserIdentityLookup(IdentityLookupPort):
    """Reads identities straight from the user repository."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def find_identity(self, user_id: int) -> Optional[Identity]:
        user = self._users.get(user_id)
        if user is None:
            return None
        return user.to_identity()
