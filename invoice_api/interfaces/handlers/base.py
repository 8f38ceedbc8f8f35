"""
Helpers shared by all resource handlers.

Parsing of bodies, path and query parameters into validated values,
and rendering of schemas into JSON responses.
"""

from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError
from starlette.responses import JSONResponse

from invoice_api.domain.access.errors import MissingCredentialError
from invoice_api.domain.invoicing.errors import InvalidRequestError
from invoice_api.interfaces.schemas import ListResponse, MessageResponse
from invoice_api.shared.dispatch.context import RequestContext

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=Enum)


async def read_body(context: RequestContext, schema: type[M]) -> M:
    """Validate the JSON request body against `schema`.

    Raises:
        InvalidRequestError: The body is not valid JSON or fails validation.
    """
    raw = await context.request.body()
    try:
        return schema.model_validate_json(raw or b"{}")
    except ValidationError as exc:
        raise InvalidRequestError(
            "Invalid request body",
            detail=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


def _is_decimal(value: str) -> bool:
    # isdigit() alone also accepts superscripts, which int() rejects
    return value.isascii() and value.isdigit()


def path_id(context: RequestContext, name: str = "id") -> int:
    """Return a positive integer path parameter."""
    value = context.path_params.get(name, "")
    if not _is_decimal(value) or int(value) < 1:
        raise InvalidRequestError(f"Invalid {name}")
    return int(value)


def query_int(context: RequestContext, name: str, default: Optional[int] = None) -> Optional[int]:
    value = context.request.query_params.get(name)
    if value is None or value == "":
        return default
    if not _is_decimal(value):
        raise InvalidRequestError(f"Invalid {name}")
    return int(value)


def query_enum(context: RequestContext, name: str, enum_type: type[E]) -> Optional[E]:
    value = context.request.query_params.get(name)
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidRequestError(f"Invalid {name}") from exc


def actor_id(context: RequestContext) -> int:
    """Id of the authenticated caller."""
    if context.identity is None:
        raise MissingCredentialError()
    return context.identity.user_id


def json_response(payload: Any, status_code: int = 200) -> JSONResponse:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    return JSONResponse(status_code=status_code, content=payload)


def list_response(schema: type[M], records: Iterable[Any]) -> JSONResponse:
    """Render records as {"items": [...], "total": n} using `schema`."""
    items = [schema.model_validate(record) for record in records]
    return json_response(ListResponse[schema](items=items, total=len(items)))


def message_response(message: str, status_code: int = 200) -> JSONResponse:
    return json_response(MessageResponse(message=message), status_code)
