from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import MissingDateRange, ValidationError


def require_date_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if start is None or end is None:
        raise MissingDateRange("Both 'from' and 'to' dates are required")
    if start > end:
        raise ValidationError(f"'from' ({start.isoformat()}) is after 'to' ({end.isoformat()})")
    return start, end


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return value
