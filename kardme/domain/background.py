"""
Card background model and migration to the versioned format.

Three shapes live in ``Card.theme["background"]``:

- legacy solid: ``{"mode": "solid", "color": ..., "opacity"?: ...}``
- legacy gradient: ``{"mode": "gradient", "from": ..., "to": ..., "angle"?: ..., "opacity"?: ...}``
- canonical v1: ``{"version": 1, "opacity": ..., "base": {...}, "overlays": [...], ...}``

``normalize_background`` is the only place that tells them apart; everything
downstream works with the canonical form.
"""
from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any, Mapping

from kardme.core.utils import is_number

logger = logging.getLogger(__name__)

BACKGROUND_VERSION = 1
DEFAULT_OPACITY = 1
DEFAULT_GRADIENT_ANGLE = 180
DEFAULT_BACKGROUND_COLOR = "#ffffff"

PATTERN_KINDS = ("dots", "grid", "lines", "diagonal", "silk", "noise", "marble")
BASE_KINDS = ("solid", "gradient", "image")


class BackgroundShape(Enum):
    ABSENT = "absent"
    CANONICAL = "canonical"
    LEGACY_SOLID = "legacy_solid"
    LEGACY_GRADIENT = "legacy_gradient"


def default_background() -> dict:
    return {
        "version": BACKGROUND_VERSION,
        "opacity": DEFAULT_OPACITY,
        "base": {"kind": "solid", "color": DEFAULT_BACKGROUND_COLOR},
        "overlays": [],
    }


def is_canonical(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("version") == BACKGROUND_VERSION


def classify_background(value: Any) -> BackgroundShape:
    """Tag a stored background value with its shape."""
    if value is None:
        return BackgroundShape.ABSENT
    if not isinstance(value, Mapping):
        # falsy scalars ("", 0, False) count as missing, other scalars fall
        # through to the gradient branch with empty fields
        return BackgroundShape.LEGACY_GRADIENT if value else BackgroundShape.ABSENT
    if is_canonical(value):
        return BackgroundShape.CANONICAL
    if value.get("mode") == "solid":
        return BackgroundShape.LEGACY_SOLID
    return BackgroundShape.LEGACY_GRADIENT


def _opacity(value: Mapping) -> Any:
    opacity = value.get("opacity")
    return opacity if is_number(opacity) else DEFAULT_OPACITY


def normalize_background(value: Any) -> dict:
    """
    Return the canonical (version 1) form of any stored background.

    Never raises and never mutates ``value``. Missing colors are carried over
    as None; the renderer is responsible for its own fallbacks.
    """
    shape = classify_background(value)
    if shape is BackgroundShape.ABSENT:
        return default_background()

    source: Mapping = value if isinstance(value, Mapping) else {}

    if shape is BackgroundShape.CANONICAL:
        result = copy.deepcopy(dict(source))
        result["opacity"] = _opacity(source)
        if result.get("overlays") is None:
            result["overlays"] = []
        return result

    if shape is BackgroundShape.LEGACY_SOLID:
        logger.debug("migrating legacy solid background")
        return {
            "version": BACKGROUND_VERSION,
            "opacity": _opacity(source),
            "base": {"kind": "solid", "color": source.get("color")},
            "overlays": [],
        }

    if shape is BackgroundShape.LEGACY_GRADIENT:
        logger.debug("migrating legacy gradient background")
        angle = source.get("angle")
        return {
            "version": BACKGROUND_VERSION,
            "opacity": _opacity(source),
            "base": {
                "kind": "gradient",
                "angle": angle if is_number(angle) else DEFAULT_GRADIENT_ANGLE,
                "stops": [
                    {"color": source.get("from"), "pos": 0},
                    {"color": source.get("to"), "pos": 100},
                ],
            },
            "overlays": [],
        }

    raise AssertionError(f"unhandled background shape: {shape}")
