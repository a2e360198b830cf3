"""Slug-related use cases (sanitation, availability, assignment)."""

from __future__ import annotations

import logging
from typing import Optional

from kardme.domain.slugs import is_valid_slug, slugify
from kardme.repositories.sql_repository import SQLRepository
from kardme.services.card_service import CardNotFoundError

logger = logging.getLogger(__name__)


class SlugError(Exception):
    """Base exception for slug workflow."""


class InvalidSlugError(SlugError):
    """Raised when value does not satisfy format/rules."""


class SlugUnavailableError(SlugError):
    """Raised when slug is already taken by another card."""


class SlugService:
    """Provides slug availability checks and assignment helpers."""

    def __init__(self, repository: Optional[SQLRepository] = None) -> None:
        self.repository = repository or SQLRepository()

    def normalize(self, value: str | None) -> str:
        return slugify(value)

    def is_available(self, value: str | None, exclude_id: str | None = None) -> bool:
        candidate = self.normalize(value)
        if not is_valid_slug(candidate):
            return False
        return not self.repository.slug_exists(candidate, exclude_id=exclude_id)

    def assign_slug(self, card_id: str, raw: str | None) -> str:
        candidate = self.normalize(raw)
        if not is_valid_slug(candidate):
            raise InvalidSlugError("Slug invalido")
        entity = self.repository.get_card(card_id)
        if not entity:
            raise CardNotFoundError(f"Card {card_id} not found")
        current = (entity.slug or "").strip()
        if candidate == current:
            return candidate
        if self.repository.slug_exists(candidate, exclude_id=card_id):
            raise SlugUnavailableError("Slug ja existe")
        self.repository.update_card_slug(card_id, candidate)
        logger.info("card %s slug changed %r -> %r", card_id, current, candidate)
        return candidate
