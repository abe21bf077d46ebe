"""
Core utilities shared across the Store API.

This package hosts:
- configuration helpers (env vars, table name, log level)
- logging setup shared by the app, the repository and the scripts

Routers and repositories should depend on these primitives instead of reading
os.environ or configuring logging on their own.
"""
