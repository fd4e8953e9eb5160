# projectZ type definitions
# Rev 0.2.0

from __future__ import annotations
from datetime import datetime, time
from decimal import Decimal

# Field types the row mapper and the parameter binder understand.
# Adding one means extending both coercion tables.
SUPPORTED_FIELD_TYPES: tuple[type, ...] = (int, str, float, Decimal, time, datetime)

# estimated_hours / actual_hours are DECIMAL(7,2): |value| < 100000, two places
HOURS_PRECISION = 7
HOURS_SCALE = 2
HOURS_QUANTUM = Decimal(1).scaleb(-HOURS_SCALE)           # 0.01
HOURS_LIMIT = Decimal(10) ** (HOURS_PRECISION - HOURS_SCALE)  # 100000
