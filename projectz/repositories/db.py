# Rev 0.2.0

"""SQLite connection factory & migration runner (Rev 0.2.0)
- A fresh connection per unit of work (connect()); callers close it
- Autocommit driver mode: transactions are opened with an explicit BEGIN
- WAL mode, foreign_keys=ON
- DECIMAL / TIME / TIMESTAMP declared columns come back as Decimal / time / datetime
- DECIMAL columns are all DECIMAL(7,2); NUMERIC affinity drops trailing zeros,
  so the converter restores the two-place scale
- Applies SQL files in projectz/data/migrations in lexical order
- Tracks applied files in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC)
"""
from __future__ import annotations
import sqlite3
from datetime import datetime, time, timezone
from decimal import Decimal
from pathlib import Path

from projectz.models.types import HOURS_QUANTUM
from projectz.utils.logging_setup import get_logger
from projectz.utils.paths import DB_PATH, MIGRATIONS_DIR


sqlite3.register_converter("DECIMAL", lambda b: Decimal(b.decode()).quantize(HOURS_QUANTUM))
sqlite3.register_converter("TIME", lambda b: time.fromisoformat(b.decode()))
sqlite3.register_converter("TIMESTAMP", lambda b: datetime.fromisoformat(b.decode()))

_log = get_logger("Database")


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self.path,
            isolation_level=None,
            detect_types=sqlite3.PARSE_DECLTYPES,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        return conn

    def _ensure_migrations_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
        )

    def applied(self) -> dict[str, str]:
        """filename -> applied_at for every migration already run."""
        conn = self.connect()
        try:
            self._ensure_migrations_table(conn)
            rows = conn.execute("SELECT filename, applied_at FROM schema_migrations ORDER BY filename").fetchall()
            return {r[0]: r[1] for r in rows}
        finally:
            conn.close()

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[Path]:
        applied = self.applied()
        return [p for p in sorted(migrations_dir.glob("*.sql")) if p.name not in applied]

    def apply_sql(self, sql: str) -> None:
        conn = self.connect()
        try:
            conn.executescript(sql)
        finally:
            conn.close()

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        to_apply = self.pending(migrations_dir)
        conn = self.connect()
        try:
            for p in to_apply:
                sql = p.read_text(encoding="utf-8")
                # executescript commits any open transaction first, so wrap it explicitly
                conn.executescript(f"BEGIN;\n{sql}\nCOMMIT;")
                conn.execute(
                    "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                    (p.name, datetime.now(timezone.utc).isoformat()),
                )
                _log.info("Applied migration %s", p.name)
        finally:
            conn.close()
        return [p.name for p in to_apply]
