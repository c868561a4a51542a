"""
Money Handling Module

Two-decimal monetary values backed by Decimal. NEVER uses float for
balances, fees or interest.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from typing import Union

from .exceptions import InvalidAmountError, NonPositiveAmountError

# Set global decimal context for financial precision
getcontext().prec = 28

CENTS = Decimal('0.01')


@dataclass(frozen=True)
class Money:
    """
    Immutable money value rounded to cents.
    All balances, fees and interest figures use this class.
    """
    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        object.__setattr__(self, 'amount', self.amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def __mul__(self, multiplier: Union[Decimal, int]) -> 'Money':
        if not isinstance(multiplier, Decimal):
            multiplier = Decimal(str(multiplier))
        return Money(self.amount * multiplier)

    def __lt__(self, other: 'Money') -> bool:
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self) -> str:
        """Format for display, e.g. $1,234.56"""
        return f"${self.amount:,.2f}"

    def __str__(self) -> str:
        return self.to_string()


def parse_amount(value: str) -> Money:
    """
    Convert a command token to a strictly positive Money amount

    Args:
        value: String representation of the amount, e.g. "599.99"

    Returns:
        Money rounded to cents

    Raises:
        NonPositiveAmountError: If the amount is zero or negative
        InvalidAmountError: If the token is not a finite number, is too large
            to hold in cents, or is positive but rounds to $0.00
    """
    try:
        amount = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        raise InvalidAmountError(f"Cannot convert '{value}' to an amount")

    if not amount.is_finite():
        raise InvalidAmountError(f"Cannot convert '{value}' to an amount")
    if amount <= 0:
        raise NonPositiveAmountError(f"Amount must be positive, got {value}")

    try:
        money = Money(amount)
    except InvalidOperation:
        raise InvalidAmountError(f"Amount '{value}' exceeds the supported precision")
    if money.is_zero():
        raise InvalidAmountError(f"Amount '{value}' is less than one cent")
    return money
