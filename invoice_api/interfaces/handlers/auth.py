"""
Handlers for /api/auth.

Registration and login are public; profile routes need a valid token;
user management routes are admin-only (declared in the route table).
Calls that hash or check a password run in the threadpool.
"""

from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from invoice_api.application.invoicing.accounts import AccountService
from invoice_api.application.invoicing.dtos import AuthResult
from invoice_api.interfaces.handlers.base import (
    actor_id,
    json_response,
    list_response,
    message_response,
    path_id,
    read_body,
)
from invoice_api.interfaces.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    CreateUserRequest,
    LoginRequest,
    RegisterRequest,
    UpdatePermissionsRequest,
    UpdateProfileRequest,
    UserResponse,
)
from invoice_api.shared.dispatch.context import RequestContext


def _auth_response(result: AuthResult, status_code: int = 200) -> Response:
    return json_response(
        AuthResponse(token=result.token, user=UserResponse.model_validate(result.user)),
        status_code,
    )


class AuthHandler:
    """Account endpoints backed by AccountService."""

    def __init__(self, accounts: AccountService) -> None:
        self._accounts = accounts

    async def register(self, context: RequestContext) -> Response:
        body = await read_body(context, RegisterRequest)
        result = await run_in_threadpool(
            self._accounts.register, body.email, body.name, body.password
        )
        return _auth_response(result, 201)

    async def login(self, context: RequestContext) -> Response:
        body = await read_body(context, LoginRequest)
        result = await run_in_threadpool(self._accounts.login, body.email, body.password)
        return _auth_response(result)

    async def get_profile(self, context: RequestContext) -> Response:
        user = self._accounts.profile(actor_id(context))
        return json_response(UserResponse.model_validate(user))

    async def update_profile(self, context: RequestContext) -> Response:
        body = await read_body(context, UpdateProfileRequest)
        user = self._accounts.update_profile(
            actor_id(context), body.model_dump(exclude_unset=True, exclude_none=True)
        )
        return json_response(UserResponse.model_validate(user))

    async def change_password(self, context: RequestContext) -> Response:
        body = await read_body(context, ChangePasswordRequest)
        await run_in_threadpool(
            self._accounts.change_password,
            actor_id(context),
            body.current_password,
            body.new_password,
        )
        return message_response("Password changed successfully")

    async def logout(self, context: RequestContext) -> Response:
        self._accounts.logout(actor_id(context))
        return message_response("Logged out successfully")

    async def get_users(self, context: RequestContext) -> Response:
        return list_response(UserResponse, self._accounts.list_users())

    async def create_user(self, context: RequestContext) -> Response:
        body = await read_body(context, CreateUserRequest)
        user = await run_in_threadpool(
            self._accounts.create_user,
            actor_id(context),
            email=body.email,
            name=body.name,
            password=body.password,
            role=body.role,
            permissions=body.permissions,
        )
        return json_response(UserResponse.model_validate(user), 201)

    async def update_user_permissions(self, context: RequestContext) -> Response:
        body = await read_body(context, UpdatePermissionsRequest)
        user = self._accounts.update_permissions(
            actor_id(context),
            path_id(context),
            role=body.role,
            permissions=body.permissions,
        )
        return json_response(UserResponse.model_validate(user))

    async def delete_user(self, context: RequestContext) -> Response:
        self._accounts.delete_user(actor_id(context), path_id(context))
        return message_response("User deleted successfully")

    async def toggle_user_status(self, context: RequestContext) -> Response:
        user = self._accounts.toggle_status(actor_id(context), path_id(context))
        return json_response(UserResponse.model_validate(user))
