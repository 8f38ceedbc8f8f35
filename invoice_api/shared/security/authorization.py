"""
Role authorization stage.

Pure check of the identity attached by the authenticator against the
capability the matched route requires.
"""

from typing import Optional

from invoice_api.domain.access.entities import Capability, Identity
from invoice_api.domain.access.errors import (
    AccessError,
    InsufficientRoleError,
    MissingCredentialError,
)
from invoice_api.shared.dispatch.context import (
    Continue,
    RequestContext,
    Stage,
    StageResult,
    Terminate,
)
from invoice_api.shared.errors.handlers import access_error_response


def authorize(identity: Optional[Identity], capability: Capability) -> Optional[AccessError]:
    """Return the refusal for this identity and capability, or None if allowed."""
    if capability is Capability.PUBLIC:
        return None
    if identity is None:
        return MissingCredentialError()
    if not identity.role.grants(capability):
        return InsufficientRoleError(identity.role.value, capability.value)
    return None


class AuthorizeStage(Stage):
    """Pipeline stage enforcing the route's required capability."""

    name = "authorize"

    async def process(self, context: RequestContext) -> StageResult:
        refusal = authorize(context.identity, context.required_capability)
        if refusal is not None:
            return Terminate(access_error_response(refusal))
        return Continue(context)
