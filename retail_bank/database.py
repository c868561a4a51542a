"""
Account Database Module

Holds the open accounts of the bank, enforces one account per holder and
account type, and produces the sorted, fee/interest and updated-balance
reports. Lookups are linear scans over an unordered list.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .accounts import Account, AccountType
from .logging_config import get_logger, log_action
from .money import Money
from .profiles import Profile

logger = get_logger("retail_bank.database")


@dataclass(frozen=True)
class AccountStatement:
    """Monthly fee and interest figures for one account"""
    account: Account
    fee: Money
    interest: Money
    balance: Money

    def describe_fees(self) -> str:
        return self.account.describe_fees(self.fee, self.interest)

    def describe_updated(self) -> str:
        return self.account.describe_updated(self.balance)


def report_order(account: Account):
    """Type precedence first, then holder order"""
    return (account.account_type.precedence, account.holder.sort_key())


class AccountDatabase:
    """
    In-memory collection of open accounts
    """

    def __init__(self):
        self._accounts: List[Account] = []

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts))

    def is_empty(self) -> bool:
        return not self._accounts

    def _index_of(self, account: Account) -> int:
        for index, stored in enumerate(self._accounts):
            if stored == account:
                return index
        return -1

    def find(self, account: Account) -> Optional[Account]:
        """Get the stored account with the same holder and type"""
        index = self._index_of(account)
        return self._accounts[index] if index >= 0 else None

    def contains(self, account: Account) -> bool:
        return self._index_of(account) >= 0

    def contains_holder(self, holder: Profile, account_type: AccountType) -> bool:
        """Check whether the holder owns an account of exactly this type"""
        return any(
            stored.holder == holder and stored.account_type is account_type
            for stored in self._accounts
        )

    def has_type_conflict(self, account: Account) -> bool:
        """True if the holder already owns the product this one excludes"""
        excluded = account.account_type.exclusive_with
        return excluded is not None and self.contains_holder(account.holder, excluded)

    def open(self, account: Account) -> bool:
        """
        Add an account

        Returns:
            False, leaving the database unchanged, if an account with the
            same holder and type is already open
        """
        if self.contains(account):
            log_action(logger, "debug", "Duplicate account rejected",
                       action="open_declined", account=self._label(account))
            return False

        self._accounts.append(account)
        log_action(logger, "info", "Account opened",
                   action="open", account=self._label(account),
                   figures={"balance": account.balance})
        return True

    def close(self, account: Account) -> bool:
        """Remove the matching account; False if there is none"""
        index = self._index_of(account)
        if index < 0:
            return False

        del self._accounts[index]
        log_action(logger, "info", "Account closed",
                   action="close", account=self._label(account))
        return True

    def deposit(self, account: Account) -> None:
        """
        Credit the amount carried by a transient account to the stored one.
        Callers check contains() first; an unknown account is ignored.
        """
        stored = self.find(account)
        if stored is None:
            return

        stored.deposit(account.balance)
        log_action(logger, "info", "Deposit posted",
                   action="deposit", account=self._label(stored),
                   figures={"amount": account.balance,
                            "balance": stored.balance})

    def withdraw(self, account: Account) -> bool:
        """
        Debit the amount carried by a transient account from the stored one

        Returns:
            False if the account is unknown or the funds are insufficient
        """
        stored = self.find(account)
        if stored is None:
            return False

        if not stored.withdraw(account.balance):
            log_action(logger, "debug", "Withdrawal declined for insufficient funds",
                       action="withdraw_declined", account=self._label(stored),
                       figures={"amount": account.balance})
            return False

        log_action(logger, "info", "Withdrawal posted",
                   action="withdraw", account=self._label(stored),
                   figures={"amount": account.balance,
                            "balance": stored.balance})
        return True

    def sorted_accounts(self) -> List[Account]:
        """Accounts grouped by type precedence, then ordered by holder"""
        return sorted(self._accounts, key=report_order)

    def fees_and_interests(self) -> List[AccountStatement]:
        """Monthly fee and interest for every account, without posting them"""
        return [
            AccountStatement(
                account=account,
                fee=account.fee_charged(),
                interest=account.interest_earned(),
                balance=account.balance
            )
            for account in self.sorted_accounts()
        ]

    def apply_fees_and_interests(self) -> List[AccountStatement]:
        """Post one month of interest and fees to every account"""
        statements = []
        total_fees = Money.zero()
        total_interest = Money.zero()
        for account in self.sorted_accounts():
            fee = account.fee_charged()
            interest = account.interest_earned()
            balance = account.apply_monthly_update()
            statements.append(AccountStatement(
                account=account, fee=fee, interest=interest, balance=balance
            ))
            total_fees = total_fees + fee
            total_interest = total_interest + interest

        log_action(logger, "info", "Monthly fees and interest applied",
                   action="update_balances",
                   figures={"accounts": len(statements),
                            "fees": total_fees,
                            "interest": total_interest})
        return statements

    @staticmethod
    def _label(account: Account) -> str:
        return f"{account.holder}({account.account_type.code})"
