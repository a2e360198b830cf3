"""
FastAPI routers grouped by domain (cards/themes, slugs, pages).

Each module exposes an APIRouter that app.py includes.
"""
