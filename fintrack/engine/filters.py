"""
Owner-scoped, optionally date-bounded selection of transactions.

A ``TransactionFilter`` is the predicate

    owner == owner_id AND (no start OR date >= start) AND (no end OR date <= end)

available both as a Python check over records and as SQLAlchemy criteria
for the store.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .errors import InvalidDateRange

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value, field: str = "date") -> Optional[date]:
    """
    Parse a ``YYYY-MM-DD`` bound. ``None`` and blank strings mean "absent".
    Datetimes are truncated to their day.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    if not ISO_DATE.match(text):
        raise InvalidDateRange(f"{field} must be a YYYY-MM-DD date, got '{text}'")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateRange(f"{field} is not a calendar date: '{text}'") from None


@dataclass(frozen=True)
class DateRange:
    """Inclusive range; either side may be open."""
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidDateRange(
                f"startDate {self.start.isoformat()} is after endDate {self.end.isoformat()}"
            )

    @property
    def is_all_time(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


ALL_TIME = DateRange()


@dataclass(frozen=True)
class TransactionFilter:
    owner_id: int
    date_range: DateRange = ALL_TIME

    def matches(self, record) -> bool:
        return record.owner_id == self.owner_id and self.date_range.contains(record.date)

    def clauses(self, model) -> list:
        """The same predicate as SQLAlchemy criteria over a transaction model."""
        criteria = [model.user_id == self.owner_id]
        if self.date_range.start is not None:
            criteria.append(model.date >= self.date_range.start)
        if self.date_range.end is not None:
            criteria.append(model.date <= self.date_range.end)
        return criteria


def build_filter(owner_id: int, start_date=None, end_date=None) -> TransactionFilter:
    start = parse_date(start_date, "startDate")
    end = parse_date(end_date, "endDate")
    return TransactionFilter(owner_id=owner_id, date_range=DateRange(start, end))
