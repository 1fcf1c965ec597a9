"""Rewrite a saved roster in the current save format.

Reads a roster JSON file written by any supported release (1.x flat
characters or the current nested format) and writes it back out in the
current format.

Usage:
    python -m scripts.migrate_roster --input old.json --output new.json [--catalog catalog.json]

Without --catalog, the built-in catalog supplies default settings.
"""

from __future__ import annotations

import argparse
import json
import locale
import logging
from pathlib import Path

from mods_optimizer.catalog import CharacterCatalog, default_catalog
from mods_optimizer.errors import CharacterDeserializationError
from mods_optimizer.roster import deserialize_roster, serialize_roster, sort_by_gp

logger = logging.getLogger(__name__)


def _load_catalog(path: Path | None) -> CharacterCatalog:
    if path is None:
        return default_catalog()
    return CharacterCatalog.from_json(json.loads(path.read_text()))


def migrate_file(input_path: Path, output_path: Path, catalog: CharacterCatalog) -> int:
    """Migrate one roster file. Returns the number of characters written."""
    payload = json.loads(input_path.read_text())
    characters = deserialize_roster(payload, catalog)
    roster = serialize_roster(sort_by_gp(characters.values()))
    output_path.write_text(json.dumps(roster, indent=2))
    return len(characters)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Migrate a saved roster to the current format")
    parser.add_argument("--input", type=Path, required=True, help="Saved roster JSON")
    parser.add_argument("--output", type=Path, required=True, help="Where to write the result")
    parser.add_argument("--catalog", type=Path, help="Catalog JSON keyed by base ID")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Ties in GP order sort by base ID in the user's collation order.
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.debug("Keeping C collation: %s", exc)

    try:
        catalog = _load_catalog(args.catalog)
        count = migrate_file(args.input, args.output, catalog)
    except (OSError, json.JSONDecodeError, CharacterDeserializationError) as exc:
        logger.error("Migration failed: %s", exc)
        return 1

    print(f"Wrote {count} characters to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
