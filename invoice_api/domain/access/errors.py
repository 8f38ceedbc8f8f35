"""
Domain-specific errors for the access bounded context.

Every reason a request can be refused before its handler runs.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class AccessError(Exception):
    """Base error for all access refusals."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RateLimitExceededError(AccessError):
    """Raised when a client exceeds its request budget for the current window."""

    def __init__(self, key: str, limit: int, window_seconds: float, retry_after: float) -> None:
        super().__init__(f"Rate limit exceeded for {key}: {limit} per {window_seconds:g}s")
        self.key = key
        self.limit = limit
        self.window_seconds = window_seconds
        self.retry_after = retry_after


class MissingCredentialError(AccessError):
    """Raised when a protected route is called without an Authorization header."""

    def __init__(self) -> None:
        super().__init__("Authorization header required")


class InvalidCredentialError(AccessError):
    """Raised when a bearer token is malformed, forged or names an unknown user."""

    def __init__(self, reason: str = "Invalid token") -> None:
        super().__init__(reason)
        self.reason = reason


class ExpiredCredentialError(AccessError):
    """Raised when a bearer token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token expired")


class InactiveAccountError(AccessError):
    """Raised when a valid token belongs to a deactivated account."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"Account is disabled: {user_id}")
        self.user_id = user_id


class InsufficientRoleError(AccessError):
    """Raised when the caller's role does not grant the route's capability."""

    def __init__(self, role: str, capability: str) -> None:
        super().__init__(f"Role {role} lacks capability {capability}")
        self.role = role
        self.capability = capability


class RouteNotFoundError(AccessError):
    """Raised when no declared route matches the request."""

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"Route not found: {method} {path}")
        self.method = method
        self.path = path
