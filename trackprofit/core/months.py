"""
Month label helpers.

Tracking rows are listed, aggregated and archived per calendar month. A month
is identified by a ``YYYY-MM`` label.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Optional, Tuple

from .errors import InvalidMonthLabel

_MONTH_LABEL_RE = re.compile(r"^(\d{4})-(\d{2})$")


def month_label(day: date) -> str:
    """Return the ``YYYY-MM`` label of the month containing ``day``."""
    return f"{day.year}-{day.month:02d}"


def previous_month_label(today: Optional[date] = None) -> str:
    """Return the label of the calendar month before ``today``."""
    today = today or date.today()
    if today.month == 1:
        return f"{today.year - 1}-12"
    return f"{today.year}-{today.month - 1:02d}"


def parse_month_label(label: str) -> Tuple[int, int]:
    """Split a month label into ``(year, month)``."""
    match = _MONTH_LABEL_RE.match(label or "")
    if not match:
        raise InvalidMonthLabel(label)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthLabel(label)
    return year, month


def month_bounds(label: str) -> Tuple[date, date]:
    """Return the first and last day of the labelled month."""
    year, month = parse_month_label(label)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
