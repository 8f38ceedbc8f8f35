"""
Security stages of the request pipeline.

Rate limiting, bearer-token authentication and role authorization.
"""
