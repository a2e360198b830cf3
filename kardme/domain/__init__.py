"""Pure domain helpers (colors, themes, backgrounds, slugs)."""
