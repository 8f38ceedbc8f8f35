"""
Domain layer package.

Contains pure business logic: entities, value objects, errors
and port interfaces. This layer has ZERO framework dependencies.
No HTTP, no IO, no side effects.
"""
