# Rev 0.2.0
"""Lightweight entities aligned with the `project` table (Rev 0.2.0)

Every field is optional so a half-populated row (missing columns, NULLs)
still maps cleanly. `project_id` stays None until the row is inserted.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Project:
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None     # 1..5, checked by the UI layers
    notes: Optional[str] = None
