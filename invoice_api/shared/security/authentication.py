"""
Bearer-token authentication stage.

Extracts the token from the Authorization header, verifies it through
the TokenPort, resolves the subject to a current Identity and attaches
it to the request context. Public routes pass through untouched.
"""

import logging
from typing import Optional

from invoice_api.domain.access.entities import Capability, Identity
from invoice_api.domain.access.errors import (
    AccessError,
    InactiveAccountError,
    InvalidCredentialError,
    MissingCredentialError,
)
from invoice_api.domain.access.ports import IdentityLookupPort, TokenPort
from invoice_api.shared.dispatch.context import (
    Continue,
    RequestContext,
    Stage,
    StageResult,
    Terminate,
)
from invoice_api.shared.errors.handlers import access_error_response

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "bearer"


def extract_bearer_token(header_value: Optional[str]) -> str:
    """Return the token from an Authorization header value.

    Raises:
        MissingCredentialError: The header is absent or empty.
        InvalidCredentialError: The header is not a Bearer credential.
    """
    if header_value is None or not header_value.strip():
        raise MissingCredentialError()
    scheme, _, token = header_value.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        raise InvalidCredentialError("Malformed authorization header")
    return token


class Authenticator:
    """Turns a raw Authorization header into a verified Identity."""

    def __init__(self, tokens: TokenPort, identities: IdentityLookupPort) -> None:
        self._tokens = tokens
        self._identities = identities

    def authenticate(self, header_value: Optional[str]) -> Identity:
        """Validate the credential and return the caller's current identity.

        Raises:
            MissingCredentialError, InvalidCredentialError,
            ExpiredCredentialError, InactiveAccountError.
        """
        token = extract_bearer_token(header_value)
        claims = self._tokens.verify(token)
        identity = self._identities.find_identity(claims.user_id)
        if identity is None:
            raise InvalidCredentialError("Unknown token subject")
        if not identity.is_active:
            raise InactiveAccountError(identity.user_id)
        return identity


class AuthenticateStage(Stage):
    """Pipeline stage requiring a valid bearer token on protected routes."""

    name = "authenticate"

    def __init__(self, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    async def process(self, context: RequestContext) -> StageResult:
        if context.required_capability is Capability.PUBLIC:
            return Continue(context)
        header = context.request.headers.get(AUTHORIZATION_HEADER)
        try:
            context.identity = self._authenticator.authenticate(header)
        except AccessError as exc:
            logger.info(
                "Authentication refused for %s %s: %s",
                context.request.method,
                context.request.url.path,
                type(exc).__name__,
            )
            return Terminate(access_error_response(exc))
        return Continue(context)
