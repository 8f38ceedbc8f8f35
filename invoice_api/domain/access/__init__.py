"""
Access bounded context: domain layer.

Identities, roles, route capabilities and the errors raised
when a request is refused before reaching a handler.
"""
