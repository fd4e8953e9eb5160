# File: projectz/tools/migrate.py
# Usage examples:
#   python -m projectz.tools.migrate up
#   python -m projectz.tools.migrate status
#   python -m projectz.tools.migrate rebuild --seed
#   python -m projectz.tools.migrate up --db /path/to/projectZ.db
#
# Notes:
# - DB path defaults to env PROJECTZ_DB, then settings.json, then the XDG data dir
# - Applies projectz/data/migrations/*.sql in lexicographic order
# - Records applied migrations in schema_migrations
# - Seeds from projectz/data/seed.sql when --seed is given

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from projectz.repositories.db import Database
from projectz.utils.config import resolve_db_path
from projectz.utils.logging_setup import get_logger
from projectz.utils.paths import MIGRATIONS_DIR, SEED_SQL

_log = get_logger("migrate")


def cmd_up(db: Database, migrations_dir: Path) -> int:
    applied = db.run_migrations(migrations_dir)
    if applied:
        for name in applied:
            print(f"→ Applied {name}")
    else:
        print("✓ Up to date")
    return 0


def cmd_status(db: Database, migrations_dir: Path) -> int:
    print(f"DB: {db.path}")
    for name, at in db.applied().items():
        print(f"  applied  {name}  ({at})")
    pending = db.pending(migrations_dir)
    for p in pending:
        print(f"  pending  {p.name}")
    if not pending:
        print("✓ No pending migrations")
    return 0


def cmd_rebuild(db: Database, migrations_dir: Path, seed: bool, seed_file: Path = SEED_SQL) -> int:
    for suffix in ("", "-wal", "-shm"):
        f = Path(f"{db.path}{suffix}")
        if f.exists():
            f.unlink()
    _log.warning("Rebuilding database %s", db.path)
    cmd_up(db, migrations_dir)
    if seed:
        if not seed_file.exists():
            print(f"✗ Seed file not found: {seed_file}", file=sys.stderr)
            return 1
        db.apply_sql(seed_file.read_text(encoding="utf-8"))
        print(f"→ Seeded from {seed_file.name}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="projectz-migrate", description="projectZ schema migrations")
    ap.add_argument("--db", help="SQLite database file")
    ap.add_argument("--migrations", type=Path, default=MIGRATIONS_DIR, help="Directory of *.sql migrations")
    sub = ap.add_subparsers(dest="cmd", required=True)
    sub.add_parser("up", help="apply pending migrations")
    sub.add_parser("status", help="list applied and pending migrations")
    rb = sub.add_parser("rebuild", help="delete the DB file and re-apply all migrations")
    rb.add_argument("--seed", action="store_true", help="load demo rows after rebuilding")
    args = ap.parse_args(argv)

    db = Database(resolve_db_path(args.db))
    if args.cmd == "up":
        return cmd_up(db, args.migrations)
    if args.cmd == "status":
        return cmd_status(db, args.migrations)
    return cmd_rebuild(db, args.migrations, args.seed)


if __name__ == "__main__":
    raise SystemExit(main())
