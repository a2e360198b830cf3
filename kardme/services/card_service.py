"""
Card lookups shared across routers/services.
"""

from __future__ import annotations

from typing import Optional

from kardme.db.models import Card, CardBlock
from kardme.repositories.sql_repository import SQLRepository


class CardNotFoundError(Exception):
    """Raised when a card does not exist (or is not published for public reads)."""


def card_to_dict(entity: Card) -> dict:
    return {
        "id": entity.id,
        "name": entity.name or "",
        "slug": entity.slug or "",
        "published": bool(entity.published),
        "theme": dict(entity.theme or {}),
    }


def block_to_dict(entity: CardBlock) -> dict:
    return {
        "id": entity.id,
        "type": entity.type,
        "settings": dict(entity.settings or {}),
        "style": dict(entity.style or {}),
        "order": int(entity.order or 0),
    }


class CardService:
    """Read helpers over cards and their enabled blocks."""

    def __init__(self, repository: Optional[SQLRepository] = None) -> None:
        self.repository = repository or SQLRepository()

    def get_card(self, card_id: str) -> Card:
        entity = self.repository.get_card(card_id) if card_id else None
        if not entity:
            raise CardNotFoundError(f"Card {card_id} not found")
        return entity

    def get_published_card(self, slug: str) -> Card:
        slug_value = (slug or "").strip()
        entity = self.repository.get_published_card_by_slug(slug_value) if slug_value else None
        if not entity:
            raise CardNotFoundError(f"Card {slug_value!r} not published")
        return entity

    def enabled_blocks(self, card_id: str) -> list[dict]:
        return [block_to_dict(block) for block in self.repository.list_enabled_blocks(card_id)]
