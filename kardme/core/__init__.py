"""
Core utilities shared across the Kardme API.

This package hosts configuration helpers, logging setup and cross-cutting
request helpers such as rate limiting. Routers and services depend on these
primitives instead of reading the environment themselves.
"""
