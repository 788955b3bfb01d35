"""Prepare the MySQL database: apply database/schema.sql, then load the demo roster.

    python scripts/seed_db.py                # schema + demo roster
    python scripts/seed_db.py --schema-only  # tables only
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.database.bootstrap import apply_schema, list_tables
from src.school_attendance.school_attendance.database.seed import seed_demo_data


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--schema-only", action="store_true", help="create the tables and stop")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"schema ready -> {target} (tables={len(list_tables(db_config))})")
    if args.schema_only:
        return

    container = build_container(storage="mysql", db_config=db_config)
    try:
        if seed_demo_data(container):
            print(f"demo roster loaded -> {target}")
        else:
            print("demo roster skipped: classes already exist")
    finally:
        container.insight_requester.shutdown()


if __name__ == "__main__":
    main()
