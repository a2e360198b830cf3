"""Seed-color palette derivation used by the theme resolver."""
from __future__ import annotations

from dataclasses import dataclass

FALLBACK_PRIMARY = "#2563EB"
TEXT_COLOR = "#FFFFFF"
MUTED_TEXT_COLOR = "#9CA3AF"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class Palette:
    primary: str
    bg: str
    card: str
    text: str
    muted: str
    accent: str

    def as_theme_fields(self) -> dict[str, str]:
        """Map palette slots onto the theme field names."""
        return {
            "primary": self.primary,
            "accent": self.accent,
            "background": self.bg,
            "surface": self.card,
            "text": self.text,
            "muted_text": self.muted,
        }


def _clamp(value: float) -> int:
    value = min(255.0, max(0.0, float(value)))
    return int(value + 0.5)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """
    Parse ``#rrggbb`` (or ``rrggbb``) into an RGB tuple.

    Parsing is permissive: only the leading run of hex digits is read and a
    string without one (or a non-string value) parses as 0, so malformed
    colors come out black instead of raising.
    """
    clean = value.replace("#", "", 1).strip() if isinstance(value, str) else ""
    digits = ""
    for ch in clean:
        if ch not in _HEX_DIGITS:
            break
        digits += ch
    number = int(digits, 16) if digits else 0
    return (number >> 16) & 255, (number >> 8) & 255, number & 255


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{_clamp(c):02x}" for c in (r, g, b))


def darken(value: str, amount: float) -> str:
    r, g, b = hex_to_rgb(value)
    return rgb_to_hex(r * (1 - amount), g * (1 - amount), b * (1 - amount))


def lighten(value: str, amount: float) -> str:
    r, g, b = hex_to_rgb(value)
    return rgb_to_hex(
        r + (255 - r) * amount,
        g + (255 - g) * amount,
        b + (255 - b) * amount,
    )


def derive_palette(primary: str | None) -> Palette:
    """Build the full card palette from a single primary color."""
    seed = primary or FALLBACK_PRIMARY
    return Palette(
        primary=seed,
        bg=darken(seed, 0.85),
        card=darken(seed, 0.75),
        text=TEXT_COLOR,
        muted=MUTED_TEXT_COLOR,
        accent=lighten(seed, 0.25),
    )
