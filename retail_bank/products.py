"""
Product Engine Module

Configurable product terms for the four account types. Interest rates,
fees, fee waivers and opening rules are read from BankConfig rather than
hard-coded, so bank policy changes are configuration changes.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from .accounts import Account, AccountType, Campus
from .config import BankConfig, get_config
from .exceptions import MinimumBalanceError, OverageError, UnderageError
from .money import Money
from .profiles import Profile

MONTHS_PER_YEAR = Decimal('12')


@dataclass(frozen=True)
class InterestConfig:
    """Interest configuration for a product"""
    annual_rate: Decimal
    loyal_annual_rate: Optional[Decimal] = None  # Bonus rate for loyal holders

    def __post_init__(self):
        for name in ('annual_rate', 'loyal_annual_rate'):
            rate = getattr(self, name)
            if rate is not None and (rate < Decimal('0') or rate > Decimal('1')):
                raise ValueError("Annual interest rate must be between 0 and 1 (0-100%)")

    def monthly_rate(self, loyal: bool = False) -> Decimal:
        """Annual rate spread evenly over twelve months"""
        rate = self.annual_rate
        if loyal and self.loyal_annual_rate is not None:
            rate = self.loyal_annual_rate
        return rate / MONTHS_PER_YEAR


@dataclass(frozen=True)
class FeeConfig:
    """Monthly maintenance fee configuration"""
    monthly_fee: Money
    waive_if_balance_at_least: Optional[Money] = None

    def calculate_fee(self, balance: Money) -> Money:
        """Fee for the month, zero when the balance reaches the waiver threshold"""
        if self.waive_if_balance_at_least is not None and balance >= self.waive_if_balance_at_least:
            return Money.zero()
        return self.monthly_fee


@dataclass(frozen=True)
class ProductTerms:
    """Everything the ledger needs to know about one account type"""
    interest: InterestConfig
    fee: FeeConfig
    minimum_opening_balance: Optional[Money] = None
    max_age: Optional[int] = None                 # Holders must be younger than this
    loyal_withdrawal_cap: Optional[int] = None    # Withdrawals that end loyalty


class ProductCatalog:
    """
    Dispatch table from account type to product terms, plus the opening
    eligibility rules shared by all products
    """

    def __init__(self, config: Optional[BankConfig] = None):
        self.config = config or get_config()
        self._terms: Dict[AccountType, ProductTerms] = self._build_terms(self.config)

    @staticmethod
    def _build_terms(config: BankConfig) -> Dict[AccountType, ProductTerms]:
        return {
            AccountType.CHECKING: ProductTerms(
                interest=InterestConfig(annual_rate=config.checking_rate),
                fee=FeeConfig(
                    monthly_fee=Money(config.checking_fee),
                    waive_if_balance_at_least=Money(config.checking_fee_waiver_balance)
                )
            ),
            AccountType.COLLEGE_CHECKING: ProductTerms(
                interest=InterestConfig(annual_rate=config.college_checking_rate),
                fee=FeeConfig(monthly_fee=Money.zero()),
                max_age=config.college_checking_max_age
            ),
            AccountType.SAVINGS: ProductTerms(
                interest=InterestConfig(
                    annual_rate=config.savings_rate,
                    loyal_annual_rate=config.savings_loyal_rate
                ),
                fee=FeeConfig(
                    monthly_fee=Money(config.savings_fee),
                    waive_if_balance_at_least=Money(config.savings_fee_waiver_balance)
                )
            ),
            AccountType.MONEY_MARKET: ProductTerms(
                interest=InterestConfig(
                    annual_rate=config.money_market_rate,
                    loyal_annual_rate=config.money_market_loyal_rate
                ),
                fee=FeeConfig(
                    monthly_fee=Money(config.money_market_fee),
                    waive_if_balance_at_least=Money(config.money_market_fee_waiver_balance)
                ),
                minimum_opening_balance=Money(config.money_market_minimum_opening),
                loyal_withdrawal_cap=config.money_market_loyal_withdrawal_cap
            ),
        }

    def terms_for(self, account_type: AccountType) -> ProductTerms:
        return self._terms[account_type]

    def check_holder(self, holder: Profile, today: Optional[date] = None) -> None:
        """
        Apply the minimum age shared by every product

        Raises:
            UnderageError: If the holder is younger than the minimum age
        """
        if holder.age(today) < self.config.min_age:
            raise UnderageError(f"{holder.date_of_birth} under {self.config.min_age}")

    def check_age_limit(self, account_type: AccountType, holder: Profile,
                        today: Optional[date] = None) -> None:
        """
        Apply the product's upper age limit, if it has one

        Raises:
            OverageError: If the holder has reached the limit
        """
        terms = self.terms_for(account_type)
        if terms.max_age is not None and holder.age(today) >= terms.max_age:
            raise OverageError(f"{holder.date_of_birth} over {terms.max_age}")

    def check_minimum_opening_balance(self, account_type: AccountType, opening_balance: Money) -> None:
        terms = self.terms_for(account_type)
        minimum = terms.minimum_opening_balance
        if minimum is not None and opening_balance < minimum:
            raise MinimumBalanceError(
                f"Minimum of {minimum} to open a {account_type.display_name} account"
            )

    def new_account(
        self,
        account_type: AccountType,
        holder: Profile,
        balance: Optional[Money] = None,
        campus: Optional[Campus] = None,
        loyal: bool = False
    ) -> Account:
        """Build an account carrying the terms of its product"""
        return Account(
            holder=holder,
            account_type=account_type,
            terms=self.terms_for(account_type),
            balance=balance if balance is not None else Money.zero(),
            campus=campus,
            loyal=loyal
        )
