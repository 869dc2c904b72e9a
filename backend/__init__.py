"""
Backend package for the creations API.

This package provides a FastAPI application over a creation store with
Postgres and in-memory implementations, guarded by bearer-token identity.
"""
