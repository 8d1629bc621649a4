"""Date manipulation utilities"""

import re
from datetime import MINYEAR, date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from finance_tracker.domain.exceptions import InvalidMonthFormatError
from finance_tracker.domain.models import InvoiceMonth

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(value: str) -> InvoiceMonth:
    """Parse a YYYY-MM query value into an InvoiceMonth"""
    match = _MONTH_PATTERN.match(value.strip())
    if not match:
        raise InvalidMonthFormatError(f"Expected month as YYYY-MM, got {value!r}")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthFormatError(f"Month must be between 01 and 12, got {value!r}")
    if year < MINYEAR:
        raise InvalidMonthFormatError(f"Year must be {MINYEAR:04d} or later, got {value!r}")
    return InvoiceMonth(year, month)


def parse_optional_month(value: Optional[str]) -> Optional[InvoiceMonth]:
    return parse_month(value) if value else None


def local_today(timezone: str) -> date:
    """Civil date right now in the configured timezone"""
    return datetime.now(ZoneInfo(timezone)).date()
