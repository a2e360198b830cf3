"""
High-level use cases for the Kardme API.

Each service module orchestrates the repository and the pure domain helpers
(theme resolution, background migration, slug sanitation). Routers call these
services instead of touching the database directly.
"""
