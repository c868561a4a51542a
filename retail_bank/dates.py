"""
Calendar Date Module

Month/day/year triples parsed from "M/D/Y" tokens. A CalendarDate may hold
an impossible date; callers must ask is_valid() before trusting it.
"""

from dataclasses import dataclass
from datetime import date
from functools import total_ordering
from typing import Optional, Tuple
import calendar

from .exceptions import DateFormatError

MONTHS_IN_YEAR = 12
FEBRUARY = 2


@total_ordering
@dataclass(frozen=True)
class CalendarDate:
    """Immutable calendar date; validity is queried, not enforced"""
    month: int
    day: int
    year: int

    @classmethod
    def parse(cls, token: str) -> 'CalendarDate':
        """
        Parse a "M/D/Y" token

        Raises:
            DateFormatError: If the token is not exactly three integer fields
        """
        parts = token.strip().split("/")
        if len(parts) != 3:
            raise DateFormatError(f"Date must have month/day/year fields: '{token}'")
        try:
            month, day, year = (int(part) for part in parts)
        except ValueError:
            raise DateFormatError(f"Date fields must be integers: '{token}'")
        return cls(month=month, day=day, year=year)

    def days_in_month(self) -> int:
        """Days in this date's month, honouring Gregorian leap years"""
        if self.month == FEBRUARY and calendar.isleap(self.year):
            return 29
        return calendar.mdays[self.month]

    def is_valid(self) -> bool:
        """Check the month, day and year form a real calendar date"""
        if self.year <= 0:
            return False
        if not 1 <= self.month <= MONTHS_IN_YEAR:
            return False
        return 1 <= self.day <= self.days_in_month()

    def is_before_today(self, today: Optional[date] = None) -> bool:
        """True iff this date is strictly earlier than today"""
        today = today or date.today()
        return self._key() < (today.year, today.month, today.day)

    def to_date(self) -> date:
        """Convert to datetime.date; only meaningful for valid dates"""
        if not self.is_valid():
            raise DateFormatError(f"{self} is not a valid calendar date")
        return date(self.year, self.month, self.day)

    def _key(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __lt__(self, other: 'CalendarDate') -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return f"{self.month}/{self.day}/{self.year}"
