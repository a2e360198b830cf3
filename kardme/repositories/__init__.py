"""
Persistence adapters.

Services depend on the repository helpers rather than on SQLAlchemy sessions.
"""
