"""
Application layer package.

Contains services that orchestrate domain logic, one per resource.
This layer depends on domain ports, never on infrastructure.
"""
