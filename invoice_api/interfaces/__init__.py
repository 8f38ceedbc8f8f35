"""
Interfaces layer package.

Contains the route table, request handlers, Pydantic request/response
schemas and input validation. No business logic belongs here.
Handlers call application services and return responses.
"""
