"""
Adapter: JWT bearer tokens.

Implements TokenPort with PyJWT. Tokens carry the user id in `sub`,
the role at issue time, and `iat`/`exp` timestamps.
The signing secret is loaded once from settings at startup.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from invoice_api.domain.access.entities import Identity, Role, TokenClaims
from invoice_api.domain.access.errors import (
    ExpiredCredentialError,
    InvalidCredentialError,
)
from invoice_api.domain.access.ports import TokenPort

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class JWTTokenService(TokenPort):
    """Issues and verifies HMAC-signed JWTs."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expiry = expiry
        self._clock = clock

    def issue(self, identity: Identity) -> str:
        """Return a signed token for the identity."""
        now = self._clock()
        payload = {
            "sub": str(identity.user_id),
            "role": identity.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expiry).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Raises:
            ExpiredCredentialError: The token is past its expiry.
            InvalidCredentialError: Bad signature, malformed token or claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredCredentialError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise InvalidCredentialError() from exc

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                role=Role(payload.get("role", Role.USER.value)),
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidCredentialError() from exc
