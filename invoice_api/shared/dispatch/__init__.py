"""
Request dispatch pipeline.

A static route table, request-scoped context, and a dispatcher that
runs ordered stages (each returning Continue or Terminate) before
invoking the matched handler.
"""

from invoice_api.shared.dispatch.context import (
    Continue,
    RequestContext,
    Stage,
    StageResult,
    Terminate,
)
from invoice_api.shared.dispatch.dispatcher import Dispatcher
from invoice_api.shared.dispatch.routing import Route, RouteGroup, RouteTable

__all__ = [
    "Continue",
    "Dispatcher",
    "RequestContext",
    "Route",
    "RouteGroup",
    "RouteTable",
    "Stage",
    "StageResult",
    "Terminate",
]
