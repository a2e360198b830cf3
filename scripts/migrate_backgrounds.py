#!/usr/bin/env python3
"""
Rewrite legacy card backgrounds ({"mode": ...}) into the versioned format.

Uso:
  python scripts/migrate_backgrounds.py [--dry-run]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Garante que o pacote kardme seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kardme.core.config import get_settings  # noqa: E402
from kardme.core.logs import configure_logging  # noqa: E402
from kardme.services.theme_service import ThemeService  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Migrate legacy card backgrounds to version 1")
    ap.add_argument("--dry-run", action="store_true", help="Only list the cards that would change")
    args = ap.parse_args(argv)

    configure_logging(get_settings().log_level)
    migrated = ThemeService().migrate_legacy_backgrounds(dry_run=args.dry_run)
    verb = "would migrate" if args.dry_run else "migrated"
    print(f"OK: {verb} {len(migrated)} card(s)")
    for card_id in migrated:
        print(f"  {card_id}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - uso CLI
        logging.getLogger("kardme").exception("background migration failed")
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
