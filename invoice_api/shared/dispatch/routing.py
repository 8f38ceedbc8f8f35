"""
Static route table.

Routes are declared once at startup as (method, pattern, capability,
handler). Patterns are made of literal segments and `:name` parameters,
for example `/api/clients/:id/invoices`. The first declared route that
matches wins. After `freeze()` the table rejects further declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from starlette.responses import Response

from invoice_api.domain.access.entities import Capability

if TYPE_CHECKING:
    from invoice_api.shared.dispatch.context import RequestContext

Handler = Callable[["RequestContext"], Awaitable[Response]]

PARAM_PREFIX = ":"


def split_path(path: str) -> tuple[str, ...]:
    """Split a path into segments, ignoring leading/trailing/double slashes."""
    return tuple(segment for segment in path.split("/") if segment)


@dataclass(frozen=True)
class Route:
    """A single method + path pattern bound to a handler."""

    method: str
    pattern: str
    handler: Handler
    capability: Capability = Capability.AUTHENTICATED
    segments: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        segments = split_path(self.pattern)
        for segment in segments:
            if segment == PARAM_PREFIX:
                raise ValueError(f"Unnamed parameter in route pattern: {self.pattern}")
        object.__setattr__(self, "segments", segments)

    def match(self, method: str, path_segments: tuple[str, ...]) -> Optional[dict[str, str]]:
        """Return captured parameters if this route matches, else None."""
        if method != self.method or len(path_segments) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for expected, actual in zip(self.segments, path_segments):
            if expected.startswith(PARAM_PREFIX):
                params[expected[1:]] = actual
            elif expected != actual:
                return None
        return params


class RouteGroup:
    """Declares routes sharing a path prefix and a capability."""

    def __init__(self, table: RouteTable, prefix: str, capability: Capability) -> None:
        self._table = table
        self._prefix = prefix.rstrip("/")
        self._capability = capability

    def add(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        capability: Optional[Capability] = None,
    ) -> Route:
        return self._table.add(
            method,
            self._prefix + pattern,
            handler,
            capability or self._capability,
        )

    def get(self, pattern: str, handler: Handler, capability: Optional[Capability] = None) -> Route:
        return self.add("GET", pattern, handler, capability)

    def post(self, pattern: str, handler: Handler, capability: Optional[Capability] = None) -> Route:
        return self.add("POST", pattern, handler, capability)

    def put(self, pattern: str, handler: Handler, capability: Optional[Capability] = None) -> Route:
        return self.add("PUT", pattern, handler, capability)

    def patch(self, pattern: str, handler: Handler, capability: Optional[Capability] = None) -> Route:
        return self.add("PATCH", pattern, handler, capability)

    def delete(self, pattern: str, handler: Handler, capability: Optional[Capability] = None) -> Route:
        return self.add("DELETE", pattern, handler, capability)


class RouteTable:
    """Ordered collection of routes, frozen before serving."""

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        capability: Capability = Capability.AUTHENTICATED,
    ) -> Route:
        """Declare a route. Raises RuntimeError once the table is frozen."""
        if self._frozen:
            raise RuntimeError("Route table is frozen")
        route = Route(method=method, pattern=pattern, handler=handler, capability=capability)
        self._routes.append(route)
        return route

    def group(
        self, prefix: str, capability: Capability = Capability.AUTHENTICATED
    ) -> RouteGroup:
        """Return a helper that declares routes under a common prefix."""
        return RouteGroup(self, prefix, capability)

    def freeze(self) -> RouteTable:
        self._frozen = True
        return self

    def resolve(self, method: str, path: str) -> Optional[tuple[Route, dict[str, str]]]:
        """Return the first route matching method and path with its parameters."""
        method = method.upper()
        segments = split_path(path)
        for route in self._routes:
            params = route.match(method, segments)
            if params is not None:
                return route, params
        return None

    def __len__(self) -> int:
        return len(self._routes)
