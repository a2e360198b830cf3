"""
Theme resolution: the single source of truth for a card's six colors.

A persisted ``Card.theme`` only stores the fields the owner changed. Every
render resolves it against a palette derived from the primary color so that
callers always receive a complete Theme.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from kardme.domain.colors import derive_palette

DEFAULT_PRIMARY = "#2563EB"

THEME_FIELDS: tuple[str, ...] = ("primary", "accent", "background", "surface", "text", "muted_text")

# snake_case field -> key used in the stored JSON
JSON_KEYS: dict[str, str] = {
    "primary": "primary",
    "accent": "accent",
    "background": "background",
    "surface": "surface",
    "text": "text",
    "muted_text": "mutedText",
}


@dataclass(frozen=True)
class Theme:
    primary: str
    accent: str
    background: str
    surface: str
    text: str
    muted_text: str

    def to_dict(self) -> dict[str, str]:
        return {JSON_KEYS[name]: getattr(self, name) for name in THEME_FIELDS}


def _override_value(overrides: Mapping[str, Any], name: str) -> Any:
    value = overrides.get(JSON_KEYS[name])
    if value is None and JSON_KEYS[name] != name:
        value = overrides.get(name)
    return value


def theme_overrides(value: Any) -> dict[str, Any]:
    """
    Extract the theme fields present in ``value``.

    Accepts a Theme, any mapping (e.g. the whole persisted ``Card.theme`` with
    its ``background`` entry) or None. Keys are returned in snake_case; fields
    whose value is not a string (None, numbers, lists, ...) are dropped.
    """
    if isinstance(value, Theme):
        return {name: getattr(value, name) for name in THEME_FIELDS}
    if not isinstance(value, Mapping):
        return {}
    found = {}
    for name in THEME_FIELDS:
        field_value = _override_value(value, name)
        if isinstance(field_value, str):
            found[name] = field_value
    return found


def resolve_theme(overrides: Any = None) -> Theme:
    """Merge ``overrides`` over the palette derived from their primary color."""
    given = theme_overrides(overrides)
    base_primary = given.get("primary", DEFAULT_PRIMARY)
    derived = derive_palette(base_primary).as_theme_fields()
    merged = {}
    for name in THEME_FIELDS:
        value = given.get(name)
        merged[name] = value if value is not None else derived[name]
    return Theme(**merged)


def theme_css_variables(theme: Theme) -> dict[str, str]:
    """CSS custom properties exposed by the public card page."""
    return {
        "--color-background": theme.background,
        "--color-surface": theme.surface,
        "--color-text": theme.text,
        "--color-primary": theme.primary,
        "--color-muted": theme.muted_text,
    }
