# Rev 0.2.0
"""Generic row -> dataclass mapper (Rev 0.2.0)
- Column name derived from field name: camelCase -> snake_case
- Columns missing from the result set leave the field at its default
- NULL values leave the field at its default
- Closed coercion table: int, str, float, Decimal, time, datetime
- A value of the wrong type for its field is a RowMappingError
"""
from __future__ import annotations
import dataclasses
import re
import sqlite3
import types
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union, get_args, get_origin, get_type_hints

from .errors import RowMappingError

T = TypeVar("T")

_UPPER_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(identifier: str) -> str:
    """`projectName` -> `project_name`; snake_case names come back unchanged."""
    return _UPPER_BOUNDARY.sub("_", identifier).lower()


# ---------- coercion table ----------

def _exact(tp: type) -> Callable[[Any], Any]:
    def _check(value: Any) -> Any:
        # bool is an int subclass; a flag in an int field is still a mismatch
        if isinstance(value, bool) or not isinstance(value, tp):
            raise TypeError(f"expected {tp.__name__}, got {type(value).__name__}")
        return value
    return _check


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected float, got {type(value).__name__}")
    return float(value)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bytes):
        value = value.decode()
    return Decimal(str(value))


def _to_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, bytes):
        value = value.decode()
    return time.fromisoformat(str(value))


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, bytes):
        value = value.decode()
    return datetime.fromisoformat(str(value))


_COERCERS: Dict[type, Callable[[Any], Any]] = {
    int: _exact(int),
    str: _exact(str),
    float: _to_float,
    Decimal: _to_decimal,
    time: _to_time,
    datetime: _to_datetime,
}


def unwrap_optional(tp: Any) -> Any:
    """Optional[X] / X | None -> X. Anything else is returned as-is."""
    if get_origin(tp) in (Union, types.UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _setter(name: str, coerce: Callable[[Any], Any]) -> Callable[[Any, Any], None]:
    def _set(obj: Any, value: Any) -> None:
        setattr(obj, name, coerce(value))
    return _set


class RowMapper(Generic[T]):
    """
    Maps result rows onto instances of a dataclass.

    The column -> setter table is built once in __init__; mapping a row is a
    dict lookup per column, no per-row type inspection.
    """

    def __init__(self, entity_type: type[T]) -> None:
        if not dataclasses.is_dataclass(entity_type):
            raise RowMappingError(f"{entity_type!r} is not a dataclass")
        self.entity_type = entity_type
        try:
            hints = get_type_hints(entity_type)
        except Exception as exc:
            raise RowMappingError(f"Unable to resolve field types of {entity_type.__name__}") from exc

        self._setters: Dict[str, Callable[[Any, Any], None]] = {}
        for f in dataclasses.fields(entity_type):
            field_type = unwrap_optional(hints.get(f.name, f.type))
            coerce = _COERCERS.get(field_type)
            if coerce is None:
                raise RowMappingError(
                    f"Unsupported field type {field_type!r} for {entity_type.__name__}.{f.name}"
                )
            self._setters[camel_to_snake(f.name)] = _setter(f.name, coerce)

    @property
    def columns(self) -> List[str]:
        return list(self._setters)

    def map_row(self, description: Sequence[Sequence[Any]], row: Sequence[Any]) -> T:
        """`description` is a DB-API cursor.description; `row` the matching tuple/Row."""
        try:
            obj = self.entity_type()
        except Exception as exc:
            raise RowMappingError(f"Unable to create object of type {self.entity_type.__name__}") from exc

        for idx, col in enumerate(description):
            setter = self._setters.get(str(col[0]).lower())
            if setter is None:
                continue
            value = row[idx]
            if value is None:
                continue
            try:
                setter(obj, value)
            except (ValueError, TypeError, InvalidOperation) as exc:
                raise RowMappingError(
                    f"Column {col[0]!r} value {value!r} does not fit {self.entity_type.__name__}"
                ) from exc
        return obj

    def map_one(self, cursor: sqlite3.Cursor) -> Optional[T]:
        row = cursor.fetchone()
        if row is None:
            return None
        return self.map_row(cursor.description, row)

    def map_many(self, cursor: sqlite3.Cursor) -> List[T]:
        desc = cursor.description
        return [self.map_row(desc, row) for row in cursor.fetchall()]


@lru_cache(maxsize=None)
def row_mapper_for(entity_type: type) -> RowMapper:
    return RowMapper(entity_type)
