"""Optional typed views over the raw text fields.

The records themselves stay string-typed; these helpers return ``None``
whenever a value cannot be interpreted instead of guessing.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

_TRUE_VALUES = {"1", "true"}
_FALSE_VALUES = {"0", "false"}


def to_decimal(text: str) -> Optional[Decimal]:
    normalized = (text or "").strip().replace(" ", "").replace("\u00a0", "")
    if not normalized:
        return None
    if "," in normalized:
        if "." in normalized:
            # 1.234,50 style thousands separator
            normalized = normalized.replace(".", "")
        normalized = normalized.replace(",", ".")
    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def to_percentage(text: str) -> Optional[Decimal]:
    return to_decimal((text or "").strip().rstrip("%"))


def to_flag(text: str) -> Optional[bool]:
    normalized = (text or "").strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def to_date(text: str) -> Optional[date]:
    normalized = (text or "").strip()[:10]
    try:
        return date.fromisoformat(normalized)
    except ValueError:
        return None
