"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and mapping
- Request dispatch pipeline
- Rate limiting, authentication and authorization stages
- Logging configuration
"""
