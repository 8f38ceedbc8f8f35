"""
Request dispatcher.

Resolves the route, runs the ordered stages in a plain loop and
invokes the handler only when every stage returned Continue.
Failures in stages or handlers are recovered here: domain errors become
their mapped JSON responses, anything else becomes a generic 500. The
response then still passes through the access log and CORS middleware.
"""

import logging
from typing import Callable, Sequence

from starlette.requests import Request
from starlette.responses import Response

from invoice_api.domain.access.errors import AccessError, RouteNotFoundError
from invoice_api.domain.invoicing.errors import InvoicingDomainError
from invoice_api.shared.dispatch.context import (
    RequestContext,
    Stage,
    Terminate,
)
from invoice_api.shared.dispatch.routing import RouteTable
from invoice_api.shared.errors.handlers import (
    HTTP_500,
    INTERNAL_ERROR,
    access_error_response,
    domain_error_response,
    error_response,
)

logger = logging.getLogger(__name__)

KeyFunc = Callable[[Request], str]


class Dispatcher:
    """Runs the stage chain and the matched handler for each request."""

    def __init__(
        self,
        routes: RouteTable,
        stages: Sequence[Stage],
        key_func: KeyFunc,
    ) -> None:
        self._routes = routes.freeze()
        self._stages = tuple(stages)
        self._key_func = key_func

    @property
    def routes(self) -> RouteTable:
        return self._routes

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    async def dispatch(self, request: Request) -> Response:
        """Process one request through the pipeline and return its response."""
        try:
            return await self._process(request)
        except InvoicingDomainError as exc:
            return domain_error_response(exc)
        except AccessError as exc:
            return access_error_response(exc)
        except Exception:
            logger.exception("Request failed: %s %s", request.method, request.url.path)
            return error_response(HTTP_500, INTERNAL_ERROR)

    async def _process(self, request: Request) -> Response:
        context = RequestContext(request=request, client_key=self._key_func(request))
        matched = self._routes.resolve(request.method, request.url.path)
        if matched is not None:
            context.route, context.path_params = matched

        for stage in self._stages:
            result = await stage.process(context)
            if isinstance(result, Terminate):
                logger.debug(
                    "Stage %s terminated %s %s with %d",
                    stage.name,
                    request.method,
                    request.url.path,
                    result.response.status_code,
                )
                return result.response
            context = result.context

        if context.route is None:
            return access_error_response(
                RouteNotFoundError(request.method, request.url.path)
            )
        return await context.route.handler(context)
