"""
Account Module

A single account record covers all four products. The account type tag
selects the variant payload (campus, loyalty flag, withdrawal counter) and
the ProductTerms carried by the account supply its interest and fee rules.

Identity is (holder, account type): two accounts for the same holder and
type are the same account whatever their balances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from .exceptions import (
    InvalidCampusError, InvalidLoyaltyError, NonPositiveAmountError, UnknownAccountTypeError
)
from .money import Money
from .profiles import Profile

if TYPE_CHECKING:
    from .products import ProductTerms


class AccountType(Enum):
    """Banking products, declared in report precedence order"""
    CHECKING = ("C", "Checking")
    COLLEGE_CHECKING = ("CC", "College Checking")
    MONEY_MARKET = ("MM", "Money Market")
    SAVINGS = ("S", "Savings")

    def __init__(self, code: str, display_name: str):
        self.code = code
        self.display_name = display_name

    @classmethod
    def from_token(cls, token: str) -> 'AccountType':
        """Resolve a command token such as "cc" or "MM", ignoring case"""
        wanted = token.strip().upper()
        for account_type in cls:
            if account_type.code == wanted:
                return account_type
        raise UnknownAccountTypeError(f"Unknown account type '{token}'")

    @property
    def precedence(self) -> int:
        return list(AccountType).index(self)

    @property
    def exclusive_with(self) -> Optional['AccountType']:
        """The product a holder may not own at the same time as this one"""
        if self is AccountType.CHECKING:
            return AccountType.COLLEGE_CHECKING
        if self is AccountType.COLLEGE_CHECKING:
            return AccountType.CHECKING
        return None


class Campus(Enum):
    """University campuses eligible for college checking"""
    NEW_BRUNSWICK = 0
    NEWARK = 1
    CAMDEN = 2

    @classmethod
    def from_code(cls, token: str) -> 'Campus':
        try:
            return cls(int(token))
        except ValueError:
            raise InvalidCampusError(f"Invalid campus code '{token}'")


def parse_loyalty_flag(token: str) -> bool:
    """Savings loyalty is opened from an explicit 0 or 1"""
    if token.strip() not in ("0", "1"):
        raise InvalidLoyaltyError(f"Loyalty flag must be 0 or 1, got '{token}'")
    return token.strip() == "1"


@dataclass(eq=False)
class Account:
    """
    Bank account for one holder and one product.

    For deposit and withdraw requests the command layer builds a transient
    Account whose balance carries the requested amount.
    """
    holder: Profile
    account_type: AccountType
    terms: ProductTerms = field(repr=False)
    balance: Money = field(default_factory=Money.zero)
    campus: Optional[Campus] = None   # College checking, required at open
    loyal: bool = False               # Savings loyalty flag
    withdrawals: int = 0              # Money market lifetime withdrawals

    def identity(self) -> Tuple[Profile, AccountType]:
        return (self.holder, self.account_type)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    @property
    def is_loyal(self) -> bool:
        """Whether the account currently earns the loyalty-tier rate"""
        if self.account_type is AccountType.SAVINGS:
            return self.loyal
        if self.account_type is AccountType.MONEY_MARKET:
            return self.withdrawals < self.terms.loyal_withdrawal_cap
        return False

    def monthly_interest_rate(self) -> Decimal:
        return self.terms.interest.monthly_rate(self.is_loyal)

    def interest_earned(self) -> Money:
        """Interest for one month on the current balance"""
        return self.balance * self.monthly_interest_rate()

    def fee_charged(self) -> Money:
        """Monthly fee, zero when the balance waives it"""
        return self.terms.fee.calculate_fee(self.balance)

    def deposit(self, amount: Money) -> None:
        if not amount.is_positive():
            raise NonPositiveAmountError("Deposit amount must be positive")
        self.balance = self.balance + amount

    def withdraw(self, amount: Money) -> bool:
        """
        Withdraw funds if the balance covers them

        Returns:
            False without touching the balance when funds are insufficient
        """
        if not amount.is_positive():
            raise NonPositiveAmountError("Withdrawal amount must be positive")
        if amount > self.balance:
            return False

        self.balance = self.balance - amount
        if self.account_type is AccountType.MONEY_MARKET:
            self.withdrawals += 1
        return True

    def apply_monthly_update(self) -> Money:
        """Credit interest and debit the fee; the balance never drops below zero"""
        updated = self.balance + self.interest_earned() - self.fee_charged()
        self.balance = updated if not updated.is_negative() else Money.zero()
        return self.balance

    def describe(self) -> str:
        """One-line display used by the listing reports"""
        return self._describe(self.balance)

    def describe_fees(self, fee: Money, interest: Money) -> str:
        """Listing line followed by this month's fee and interest figures"""
        return f"{self.describe()}::fee {fee}::monthly interest {interest}"

    def describe_updated(self, balance: Money) -> str:
        """Listing line showing the balance after fees and interest were posted"""
        return self._describe(balance)

    def _describe(self, balance: Money) -> str:
        text = f"{self.account_type.display_name}::{self.holder}::Balance {balance}"
        if self.account_type is AccountType.COLLEGE_CHECKING and self.campus is not None:
            text += f"::{self.campus.name}"
        elif self.account_type is AccountType.SAVINGS and self.is_loyal:
            text += "::is loyal"
        elif self.account_type is AccountType.MONEY_MARKET:
            if self.is_loyal:
                text += "::is loyal"
            text += f"::withdrawal: {self.withdrawals}"
        return text
