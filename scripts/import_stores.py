#!/usr/bin/env python3
"""
Import stores from a JSON file into the store table.

The file holds either one store object or an array of them, in the same shape
the POST /api/store endpoint accepts.

Usage:
  python scripts/import_stores.py stores.json [--table stores]
"""
from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
import sys

# Make the store_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from store_api.app import build_store_repository  # noqa: E402
from store_api.core.config import get_settings  # noqa: E402
from store_api.core.log import configure_logging  # noqa: E402
from store_api.domain.stores import InvalidStoreError, store_from_payload  # noqa: E402
from store_api.repositories.store_repository import StoreErrorKind, StoreRepository  # noqa: E402
from store_api.repositories.table_storage import TableStorageError  # noqa: E402


def _load_payloads(path: Path) -> list:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, list) else [data]


def import_stores(repo: StoreRepository, payloads: list) -> int:
    """Create every payload; returns the number of hard failures (invalid or storage)."""
    failures = 0
    for idx, payload in enumerate(payloads):
        try:
            store = store_from_payload(payload)
        except InvalidStoreError as exc:
            print(f"  #{idx}: invalid ({exc})")
            failures += 1
            continue
        result = repo.create(store)
        if result.ok:
            print(f"  #{idx}: created {store.store_no}")
        elif result.error is StoreErrorKind.DUPLICATE_KEY:
            print(f"  #{idx}: duplicate {store.store_no}")
        else:
            print(f"  #{idx}: {result.error.value} {store.store_no} ({result.message})")
            failures += 1
    return failures


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Import stores from a JSON file")
    ap.add_argument("path", help="JSON file with a store object or an array of stores")
    ap.add_argument("--table", help="Table name (default: STORE_TABLE_NAME or 'stores')")
    args = ap.parse_args(argv)

    settings = get_settings()
    if args.table:
        settings = replace(settings, table_name=args.table.strip())
    configure_logging(settings.log_level)
    repo = build_store_repository(settings)

    payloads = _load_payloads(Path(args.path))
    print(f"Importing {len(payloads)} store(s) into '{settings.table_name}'")
    failures = import_stores(repo, payloads)
    print("OK" if not failures else f"{failures} store(s) failed")
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except (RuntimeError, ValueError, TableStorageError) as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
