"""
Adapter: bcrypt password hashing.

Implements the PasswordHasher port.
"""

import bcrypt

from invoice_api.domain.invoicing.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes. Rounds are configurable so tests stay fast."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(self._rounds)).decode()

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode(), hashed.encode())
        except ValueError:
            # malformed stored hash
            return False
