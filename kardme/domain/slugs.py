"""Domain helpers for slug sanitation and validation."""
from __future__ import annotations

import re

RESERVED_SLUGS = {
    "reset-password",
    "forgot-password",
    "login",
    "dashboard",
    "api",
    "templates",
}

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_RE = re.compile(r"[^a-z0-9-]")
_DASHES_RE = re.compile(r"-+")


def slugify(value: str | None) -> str:
    """Lowercase, dash-separated ``[a-z0-9-]`` form of ``value``."""
    slug = (value or "").lower().strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _INVALID_RE.sub("", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(value: str | None) -> bool:
    """Return True when slug is already sanitized and not reserved."""
    if not value:
        return False
    return slugify(value) == value and value not in RESERVED_SLUGS
