from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

from ..core.constants import DATE_FORMAT
from ..core.exceptions import InvalidDate


_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string into date."""
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value):
        raise InvalidDate(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDate(f"Invalid date {value!r}, expected YYYY-MM-DD")


def coerce_date(value: Union[date, datetime, str, None]) -> date:
    """Accept a date, a datetime (time part dropped) or an ISO string."""
    if value is None:
        raise InvalidDate("Date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip())
    raise InvalidDate(f"Unsupported date value {value!r}")


def coerce_optional_date(value: Union[date, str, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    return coerce_date(value)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
