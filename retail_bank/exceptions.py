"""
Exception hierarchy for the retail bank ledger.

Validation and business-rule failures are raised before any state is
touched, so callers can report them and carry on.
"""


class BankError(Exception):
    """Base exception for all ledger errors."""


class DateFormatError(BankError, ValueError):
    """Raised when a date token is not three integer fields separated by '/'."""


class InvalidAmountError(BankError, ValueError):
    """Raised when an amount is not a number or is not strictly positive."""


class UnknownAccountTypeError(BankError):
    """Raised when an account type token does not name a known product."""


class InvalidCampusError(BankError):
    """Raised when a campus code is outside the campus enumeration."""


class InvalidLoyaltyError(BankError):
    """Raised when a loyalty flag is anything other than 0 or 1."""


class EligibilityError(BankError):
    """Base class for account opening rule violations."""


class UnderageError(EligibilityError):
    """Raised when the holder is younger than the minimum opening age."""


class OverageError(EligibilityError):
    """Raised when the holder is too old for the requested product."""


class MinimumBalanceError(EligibilityError):
    """Raised when the opening deposit is below the product minimum."""


class NonPositiveAmountError(InvalidAmountError):
    """Raised when an amount parses but is zero or negative."""
