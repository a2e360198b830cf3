"""Web app manifest for public card pages (add-to-home-screen)."""

from __future__ import annotations

from typing import Optional

from kardme.repositories.sql_repository import SQLRepository

APP_NAME = "Kardme"
MANIFEST_BACKGROUND = "#ffffff"
MANIFEST_THEME_COLOR = "#3b82f6"
FAVICON_ICON = {"src": "/favicon-192.png", "sizes": "192x192", "type": "image/png"}


def _fallback_manifest() -> dict:
    return {
        "name": APP_NAME,
        "short_name": APP_NAME,
        "description": "Cartões digitais inteligentes",
        "start_url": "/",
        "display": "standalone",
        "background_color": MANIFEST_BACKGROUND,
        "theme_color": MANIFEST_THEME_COLOR,
        "icons": [dict(FAVICON_ICON)],
    }


def _card_manifest(slug: str) -> dict:
    return {
        "name": APP_NAME,
        "short_name": APP_NAME,
        "description": "Cartão digital",
        "start_url": f"/{slug}",
        "display": "standalone",
        "background_color": MANIFEST_BACKGROUND,
        "theme_color": MANIFEST_THEME_COLOR,
        "icons": [
            {"src": f"/{slug}/apple-touch-icon.png", "sizes": "180x180", "type": "image/png"},
            dict(FAVICON_ICON),
        ],
    }


def build_manifest(slug: str, repository: Optional[SQLRepository] = None) -> dict:
    """Manifest for a published card, or the generic one when it is not found."""
    repo = repository or SQLRepository()
    slug_value = (slug or "").strip()
    card = repo.get_published_card_by_slug(slug_value) if slug_value else None
    if not card:
        return _fallback_manifest()
    return _card_manifest(card.slug)
