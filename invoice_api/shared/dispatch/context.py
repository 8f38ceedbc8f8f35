"""
Request context and stage results for the dispatch pipeline.

Every stage receives the request context and returns either
Continue(context) to hand over to the next stage, or
Terminate(response) to end the chain with a final response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from starlette.requests import Request
from starlette.responses import Response

from invoice_api.domain.access.entities import Capability, Identity

if TYPE_CHECKING:
    from invoice_api.shared.dispatch.routing import Route


@dataclass
class RequestContext:
    """Request-scoped state enriched by each stage.

    Attributes:
        request: The incoming Starlette request.
        client_key: Key used for rate limiting (client IP).
        route: The matched route, or None when nothing matched.
        path_params: Named parameters captured from the path.
        identity: Set by the authenticator for protected routes.
    """

    request: Request
    client_key: str
    route: Optional[Route] = None
    path_params: dict[str, str] = field(default_factory=dict)
    identity: Optional[Identity] = None

    @property
    def required_capability(self) -> Capability:
        """Capability the matched route demands. Unmatched requests are public."""
        if self.route is None:
            return Capability.PUBLIC
        return self.route.capability


@dataclass(frozen=True)
class Continue:
    """Stage passed; carry on with the (possibly enriched) context."""

    context: RequestContext


@dataclass(frozen=True)
class Terminate:
    """Stage short-circuited; this response is final."""

    response: Response


StageResult = Union[Continue, Terminate]


class Stage(ABC):
    """One step of the pipeline that runs before the handler."""

    name: str = "stage"

    @abstractmethod
    async def process(self, context: RequestContext) -> StageResult:
        """Inspect the context and decide whether the request may proceed."""
        raise NotImplementedError
