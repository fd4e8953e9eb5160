# Rev 0.2.0
# projectz/ui/input_parsing.py
"""Text -> value helpers shared by the console menu and the desktop form."""
from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Optional

from projectz.models.errors import InvalidInputError
from projectz.models.types import HOURS_LIMIT, HOURS_QUANTUM

DIFFICULTY_MIN = 1
DIFFICULTY_MAX = 5


def clean_text(text: Optional[str]) -> Optional[str]:
    """Strip; blank -> None."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def parse_int(text: Optional[str]) -> Optional[int]:
    text = clean_text(text)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidInputError(f"{text} invalid number") from None


def parse_hours(text: Optional[str]) -> Optional[Decimal]:
    """Decimal with exactly two places, below 100000; anything else is rejected."""
    text = clean_text(text)
    if text is None:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidInputError(f"{text} invalid number") from None
    if not value.is_finite():
        raise InvalidInputError(f"{text} invalid number")
    if abs(value) >= HOURS_LIMIT:
        raise InvalidInputError(f"{text} must be less than {HOURS_LIMIT}")
    scaled = value.quantize(HOURS_QUANTUM)
    if scaled != value:
        raise InvalidInputError(f"{text} has more than two decimal places")
    return scaled


def is_valid_difficulty(value: int) -> bool:
    return DIFFICULTY_MIN <= value <= DIFFICULTY_MAX


def parse_difficulty(text: Optional[str]) -> Optional[int]:
    value = parse_int(text)
    if value is not None and not is_valid_difficulty(value):
        raise InvalidInputError(f"Difficulty must be between {DIFFICULTY_MIN} and {DIFFICULTY_MAX}")
    return value
