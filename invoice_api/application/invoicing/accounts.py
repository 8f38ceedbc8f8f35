"""
Use cases: user accounts.

Registration, login, profile management, password changes and the
administrator's user management. Passwords are only ever handled
through the PasswordHasher port; tokens through the TokenPort.

Failure cases: DuplicateRecordError, AuthenticationFailedError,
AccountDisabledError, RecordNotFoundError, InvalidOperationError.
"""

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.dtos import AuthResult
from invoice_api.domain.access.entities import Role
from invoice_api.domain.access.ports import TokenPort
from invoice_api.domain.invoicing.entities import User, utcnow
from invoice_api.domain.invoicing.errors import (
    AccountDisabledError,
    AuthenticationFailedError,
    DuplicateRecordError,
    InvalidOperationError,
    RecordNotFoundError,
)
from invoice_api.domain.invoicing.ports import PasswordHasher, UserRepository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "user"


class AccountService:
    """Orchestrates account lifecycle and sign-in."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenPort,
        audit: AuditTrail,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._audit = audit

    # -- self service ---------------------------------------------------

    def register(self, email: str, name: str, password: str) -> AuthResult:
        """Create a regular account and sign it in."""
        user = self._create(email=email, name=name, password=password, role=Role.USER)
        self._audit.record(user.id, "register", ENTITY_TYPE, user.id, user.email)
        return AuthResult(user=user, token=self._tokens.issue(user.to_identity()))

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and return a fresh token.

        Unknown emails and wrong passwords fail identically.
        """
        user = self._users.get_by_email(email)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthenticationFailedError()
        if not user.is_active:
            raise AccountDisabledError(user.email)
        self._audit.record(user.id, "login", ENTITY_TYPE, user.id)
        return AuthResult(user=user, token=self._tokens.issue(user.to_identity()))

    def logout(self, user_id: int) -> None:
        # Tokens are stateless; logout is recorded for the audit trail only.
        self._audit.record(user_id, "logout", ENTITY_TYPE, user_id)

    def profile(self, user_id: int) -> User:
        return self._get(user_id)

    def update_profile(self, user_id: int, changes: Mapping[str, Any]) -> User:
        """Update the caller's own name and/or email."""
        user = self._get(user_id)
        changes = dict(changes)
        if changes.get("email") is not None:
            changes["email"] = changes["email"].strip().lower()
            self._ensure_email_free(changes["email"], except_id=user_id)
        updated = self._users.update(replace(user, **changes, updated_at=utcnow()))
        self._audit.record(user_id, "update_profile", ENTITY_TYPE, user_id, ", ".join(sorted(changes)))
        return updated

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self._get(user_id)
        if not self._hasher.verify(current_password, user.password_hash):
            raise InvalidOperationError("Current password is incorrect")
        self._users.update(
            replace(user, password_hash=self._hasher.hash(new_password), updated_at=utcnow())
        )
        self._audit.record(user_id, "change_password", ENTITY_TYPE, user_id)

    # -- administration -------------------------------------------------

    def list_users(self) -> list[User]:
        return self._users.list_all()

    def create_user(
        self,
        actor_id: int,
        email: str,
        name: str,
        password: str,
        role: Role = Role.USER,
        permissions: Sequence[str] = (),
    ) -> User:
        user = self._create(email, name, password, role, permissions)
        self._audit.record(actor_id, "create", ENTITY_TYPE, user.id, f"{user.email} ({role.value})")
        return user

    def update_permissions(
        self,
        actor_id: int,
        user_id: int,
        role: Optional[Role] = None,
        permissions: Optional[Sequence[str]] = None,
    ) -> User:
        """Change a user's role and/or permission list."""
        user = self._get(user_id)
        if user_id == actor_id and role is not None and role is not user.role:
            raise InvalidOperationError("You cannot change your own role")
        updated = replace(
            user,
            role=role if role is not None else user.role,
            permissions=tuple(permissions) if permissions is not None else user.permissions,
            updated_at=utcnow(),
        )
        self._users.update(updated)
        self._audit.record(
            actor_id,
            "update_permissions",
            ENTITY_TYPE,
            user_id,
            f"role={updated.role.value} permissions={','.join(updated.permissions)}",
        )
        return updated

    def delete_user(self, actor_id: int, user_id: int) -> None:
        if user_id == actor_id:
            raise InvalidOperationError("You cannot delete your own account")
        user = self._get(user_id)
        self._users.delete(user_id)
        self._audit.record(actor_id, "delete", ENTITY_TYPE, user_id, user.email)

    def toggle_status(self, actor_id: int, user_id: int) -> User:
        """Flip a user's active flag. Deactivated users are refused on every request."""
        if user_id == actor_id:
            raise InvalidOperationError("You cannot deactivate your own account")
        user = self._get(user_id)
        updated = self._users.update(
            replace(user, is_active=not user.is_active, updated_at=utcnow())
        )
        self._audit.record(
            actor_id,
            "activate" if updated.is_active else "deactivate",
            ENTITY_TYPE,
            user_id,
        )
        return updated

    def ensure_admin(self, email: str, password: str, name: str = "Administrator") -> User:
        """Create the bootstrap administrator unless the email is taken."""
        existing = self._users.get_by_email(email)
        if existing is not None:
            return existing
        user = self._create(email, name, password, Role.ADMIN)
        logger.info("Bootstrap administrator created: id=%d", user.id)
        self._audit.record(None, "bootstrap_admin", ENTITY_TYPE, user.id, user.email)
        return user

    # -- helpers --------------------------------------------------------

    def _get(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise RecordNotFoundError("User", user_id)
        return user

    def _ensure_email_free(self, email: str, except_id: Optional[int] = None) -> None:
        existing = self._users.get_by_email(email)
        if existing is not None and existing.id != except_id:
            raise DuplicateRecordError("User", "email", email)

    def _create(
        self,
        email: str,
        name: str,
        password: str,
        role: Role,
        permissions: Sequence[str] = (),
    ) -> User:
        email = email.strip().lower()
        self._ensure_email_free(email)
        stored = self._users.add_if_email_free(
            User(
                email=email,
                name=name,
                password_hash=self._hasher.hash(password),
                role=role,
                permissions=tuple(permissions),
            )
        )
        if stored is None:
            # lost a race with a concurrent registration while hashing
            raise DuplicateRecordError("User", "email", email)
        return stored
