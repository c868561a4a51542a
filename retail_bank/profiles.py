"""
Holder Profile Module

Identifies an account holder by name and date of birth. Names compare
case-insensitively, so "john DOE" and "John Doe" born on the same day are
the same person.
"""

from dataclasses import dataclass
from datetime import date
from functools import total_ordering
from typing import Optional, Tuple

from .dates import CalendarDate


@total_ordering
@dataclass(frozen=True, eq=False)
class Profile:
    """Account holder identity"""
    first_name: str
    last_name: str
    date_of_birth: CalendarDate

    def age(self, today: Optional[date] = None) -> int:
        """Whole years since birth; a birthday not yet reached this year does not count"""
        today = today or date.today()
        dob = self.date_of_birth
        years = today.year - dob.year
        if (today.month, today.day) < (dob.month, dob.day):
            years -= 1
        return years

    def identity_key(self) -> Tuple[str, str, CalendarDate]:
        return (self.first_name.lower(), self.last_name.lower(), self.date_of_birth)

    def sort_key(self) -> Tuple[str, str, CalendarDate]:
        """Report ordering: last name, first name, then date of birth"""
        return (self.last_name.lower(), self.first_name.lower(), self.date_of_birth)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.identity_key() == other.identity_key()

    def __hash__(self) -> int:
        return hash(self.identity_key())

    def __lt__(self, other: 'Profile') -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} {self.date_of_birth}"
