#!/usr/bin/env python3
"""
One-off migration: copy every blob from the JSON data file into the SQL table.

Usage:
  DATABASE_URL=sqlite:///blog.db python scripts/migrate_to_sql.py [--data-file data.json]
"""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Make the package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blogfeed.core.config import get_settings  # noqa: E402
from blogfeed.db.create_tables import create_all  # noqa: E402
from blogfeed.repositories.json_storage import JSONFileStore  # noqa: E402
from blogfeed.repositories.sql_repository import SQLBlobStore  # noqa: E402


def migrate(source: JSONFileStore, target: SQLBlobStore) -> int:
    """Copy blobs key by key; existing SQL rows with the same key are overwritten."""
    copied = 0
    for key in source.keys():
        value = source.get(key)
        if value is None:
            continue
        target.set(key, value)
        copied += 1
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy JSON blobs into the SQL backend")
    ap.add_argument("--data-file", help="JSON data file (default: DATA_FILE setting)")
    args = ap.parse_args()

    data_file = Path(args.data_file) if args.data_file else get_settings().data_file
    if not data_file.exists():
        raise SystemExit(f"Data file not found: {data_file}")
    create_all()
    copied = migrate(JSONFileStore(data_file), SQLBlobStore())
    print(f"[db] {copied} blob(s) copied from {data_file}")


if __name__ == "__main__":
    main()
