"""
Core package.

Holds process-wide configuration and the application state object.
"""
