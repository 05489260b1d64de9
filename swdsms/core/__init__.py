"""
Core utilities shared across the SWDSMS API.

This package hosts configuration helpers (env vars, storage paths), logging
setup and password hashing. Routers, services and storage adapters depend on
these primitives instead of reading the environment themselves.
"""
