# Rev 0.2.0
# projectZ – DaoBase (Rev 0.2.0)
# Per-call transactions, typed parameter binding, last-insert-id lookup.

from __future__ import annotations
import sqlite3
from contextlib import contextmanager
from datetime import datetime, time
from decimal import Decimal
from typing import Any, Iterator, Optional

from projectz.models.errors import DbError
from projectz.models.row_mapper import unwrap_optional
from projectz.models.types import SUPPORTED_FIELD_TYPES
from projectz.utils.logging_setup import get_logger


class DaoBase:
    """
    Shared plumbing for table DAOs.

    `db` is the Database wrapper (repositories/db.py); every transaction()
    gets its own connection from db.connect() and closes it on the way out.
    """

    def __init__(self, db) -> None:
        self._db = db
        self._log = get_logger(type(self).__name__)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """BEGIN -> yield -> COMMIT; ROLLBACK and raise DbError on any failure."""
        conn = None
        try:
            conn = self._db.connect()
            conn.execute("BEGIN")
            yield conn
            conn.execute("COMMIT")
        except Exception as exc:
            if conn is not None and conn.in_transaction:
                self._log.warning("Rolling back: %s", exc)
                try:
                    conn.execute("ROLLBACK")
                except sqlite3.Error as rb_exc:
                    self._log.error("Rollback failed: %s", rb_exc)
            if isinstance(exc, DbError):
                raise
            raise DbError(str(exc)) from exc
        finally:
            if conn is not None:
                conn.close()

    # ---------- parameter binding ----------

    @staticmethod
    def bind(value: Any, field_type: Any, *, precision: Optional[int] = None, scale: Optional[int] = None) -> Any:
        """
        Convert a Python value to what sqlite3 should receive for a column of
        `field_type`. None binds as SQL NULL, but the type is still checked.
        For Decimal, `precision`/`scale` mirror DECIMAL(p,s): values that would
        not fit are refused rather than rounded by SQLite.
        """
        field_type = unwrap_optional(field_type)
        if field_type not in SUPPORTED_FIELD_TYPES:
            raise DbError(f"Unsupported parameter type: {field_type!r}")
        if value is None:
            return None
        # bool is an int subclass but never a valid column value here
        if isinstance(value, bool) or not isinstance(value, field_type):
            raise DbError(f"Expected {field_type.__name__}, got {type(value).__name__}: {value!r}")
        if field_type is Decimal:
            if precision is not None and scale is not None:
                return str(_fit_decimal(value, precision, scale))
            return str(value)
        if field_type is datetime:
            return value.isoformat(sep=" ")
        if field_type is time:
            return value.isoformat()
        return value

    # ---------- keys ----------

    @staticmethod
    def last_insert_id(conn: sqlite3.Connection) -> int:
        """Key of the row just inserted on *this* connection."""
        row = conn.execute("SELECT last_insert_rowid()").fetchone()
        if row is None:
            raise DbError("Unable to retrieve the primary key value. No result set!")
        return int(row[0])


def _fit_decimal(value: Decimal, precision: int, scale: int) -> Decimal:
    if not value.is_finite():
        raise DbError(f"{value} is not a finite DECIMAL({precision},{scale})")
    if abs(value) >= Decimal(10) ** (precision - scale):
        raise DbError(f"{value} out of range for DECIMAL({precision},{scale})")
    scaled = value.quantize(Decimal(1).scaleb(-scale))
    if scaled != value:
        raise DbError(f"{value} has more than {scale} decimal places")
    return scaled
