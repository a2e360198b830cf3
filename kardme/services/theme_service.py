"""Theme/background use cases: public resolution and editor write-back."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from kardme.core.utils import absolute_url
from kardme.domain.background import classify_background, normalize_background, BackgroundShape
from kardme.domain.background_css import background_style, browser_bar_color, inline_style
from kardme.domain.presets import get_bg_preset_by_id
from kardme.domain.theme import JSON_KEYS, THEME_FIELDS, resolve_theme, theme_css_variables
from kardme.repositories.sql_repository import SQLRepository
from kardme.services.card_service import CardService

logger = logging.getLogger(__name__)

BACKGROUND_KEY = "background"


class ThemeError(Exception):
    """Base exception for theme workflow."""


class InvalidThemeError(ThemeError):
    """Raised when a theme/background payload is not a JSON object."""


class PresetNotFoundError(ThemeError):
    """Raised when a background preset id is unknown."""


@dataclass
class CardTheme:
    card_id: str
    slug: str
    theme: dict
    background: dict
    css_variables: dict
    style: dict = field(default_factory=dict)
    style_inline: str = ""
    opacity: float = 1
    css_string: Optional[str] = None
    theme_color: str = "#000000"
    public_url: str = ""

    def to_dict(self) -> dict:
        return {
            "cardId": self.card_id,
            "slug": self.slug,
            "theme": self.theme,
            "background": self.background,
            "cssVariables": self.css_variables,
            "style": self.style,
            "styleInline": self.style_inline,
            "opacity": self.opacity,
            "cssString": self.css_string,
            "themeColor": self.theme_color,
            "publicUrl": self.public_url,
        }


def build_card_theme(card_id: str, slug: str, stored_theme: Any) -> CardTheme:
    """Resolve a stored ``Card.theme`` into everything the card page paints."""
    stored = stored_theme if isinstance(stored_theme, Mapping) else {}
    theme = resolve_theme(stored)
    raw_background = stored.get(BACKGROUND_KEY)
    background = normalize_background(raw_background)
    rendered = background_style(background)
    return CardTheme(
        card_id=card_id,
        slug=slug,
        theme=theme.to_dict(),
        background=background,
        css_variables=theme_css_variables(theme),
        style=rendered.style,
        style_inline=inline_style(rendered.style),
        opacity=rendered.opacity,
        css_string=rendered.css_string,
        theme_color=browser_bar_color(background),
        public_url=absolute_url(f"/{slug}") if slug else "",
    )


class ThemeService:
    """Reads and persists card themes, always storing backgrounds in canonical form."""

    def __init__(self, repository: Optional[SQLRepository] = None) -> None:
        self.repository = repository or SQLRepository()
        self.cards = CardService(self.repository)

    def public_theme(self, slug: str) -> CardTheme:
        card = self.cards.get_published_card(slug)
        return build_card_theme(card.id, card.slug or "", card.theme)

    def card_theme(self, card_id: str) -> CardTheme:
        card = self.cards.get_card(card_id)
        return build_card_theme(card.id, card.slug or "", card.theme)

    def save_theme(self, card_id: str, overrides: Any) -> CardTheme:
        """Store color overrides; unknown keys and non-string values are dropped."""
        if not isinstance(overrides, Mapping):
            raise InvalidThemeError("Tema invalido")
        card = self.cards.get_card(card_id)
        stored = dict(card.theme or {})
        for name in THEME_FIELDS:
            key = JSON_KEYS[name]
            value = overrides.get(key, overrides.get(name))
            if isinstance(value, str) and value.strip():
                stored[key] = value.strip()
            elif key in overrides or name in overrides:
                # explicit null/empty clears the override
                stored.pop(key, None)
        self.repository.update_card_theme(card.id, stored)
        logger.info("theme saved for card %s", card.id)
        return build_card_theme(card.id, card.slug or "", stored)

    def save_background(self, card_id: str, value: Any) -> dict:
        """Persist ``value`` as a canonical background and return it."""
        if value is not None and not isinstance(value, Mapping):
            raise InvalidThemeError("Fundo invalido")
        card = self.cards.get_card(card_id)
        shape = classify_background(value)
        if shape in (BackgroundShape.LEGACY_SOLID, BackgroundShape.LEGACY_GRADIENT):
            logger.info("card %s: legacy background (%s) migrated on save", card.id, shape.value)
        canonical = normalize_background(value)
        stored = dict(card.theme or {})
        stored[BACKGROUND_KEY] = canonical
        self.repository.update_card_theme(card.id, stored)
        logger.info("background saved for card %s", card.id)
        return canonical

    def apply_preset(self, card_id: str, preset_id: str) -> dict:
        preset = get_bg_preset_by_id(preset_id)
        if not preset:
            raise PresetNotFoundError(f"Preset {preset_id} not found")
        return self.save_background(card_id, preset.bg)

    def migrate_legacy_backgrounds(self, *, dry_run: bool = False) -> list[str]:
        """Rewrite every stored legacy background as canonical; return touched card ids."""
        migrated = []
        for card in self.repository.list_cards():
            stored = dict(card.theme or {})
            raw = stored.get(BACKGROUND_KEY)
            if not isinstance(raw, Mapping):
                continue
            shape = classify_background(raw)
            if shape not in (BackgroundShape.LEGACY_SOLID, BackgroundShape.LEGACY_GRADIENT):
                continue
            migrated.append(card.id)
            if dry_run:
                logger.info("card %s: would migrate %s background", card.id, shape.value)
                continue
            stored[BACKGROUND_KEY] = normalize_background(raw)
            self.repository.update_card_theme(card.id, stored)
            logger.info("card %s: migrated %s background", card.id, shape.value)
        return migrated
