"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: persistence, password hashing,
token signing and export rendering.
"""
