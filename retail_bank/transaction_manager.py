"""
Transaction Manager Module

Line-oriented command processor in front of the account database. Parses
each command, validates every field before touching the database and
composes all user-facing messages. The ledger core never prints.

    O  C John Doe 2/19/2000 599.99
    O  CC Jane Doe 10/1/2000 999.99 0
    O  S april March 1/15/1987 1500 1
    O  MM Roy Brooks 10/31/1979 2909.10
    C  S april March 1/15/1987
    D  C John Doe 2/19/2000 100
    W  MM Roy Brooks 10/31/1979 10.50
    P | PI | UB | Q
"""

import sys
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, TextIO

from .accounts import Account, AccountType, Campus, parse_loyalty_flag
from .database import AccountDatabase
from .dates import CalendarDate
from .exceptions import (
    BankError, DateFormatError, InvalidAmountError, InvalidCampusError, InvalidLoyaltyError,
    MinimumBalanceError, NonPositiveAmountError, OverageError, UnderageError,
    UnknownAccountTypeError
)
from .logging_config import get_logger, log_action
from .money import Money, parse_amount
from .products import ProductCatalog
from .profiles import Profile

logger = get_logger("retail_bank.transaction_manager")

CMD_OPEN = "O"
CMD_CLOSE = "C"
CMD_DEPOSIT = "D"
CMD_WITHDRAW = "W"
CMD_PRINT = "P"
CMD_PRINT_FEES = "PI"
CMD_APPLY_FEES = "UB"
CMD_QUIT = "Q"

INDEX_TYPE = 1
INDEX_FIRST_NAME = 2
INDEX_LAST_NAME = 3
INDEX_DOB = 4
INDEX_AMOUNT = 5
INDEX_CAMPUS = 6
INDEX_LOYALTY = 6

END_OF_LIST = "*end of list."
EMPTY_DATABASE = "Account Database is empty!"


class Task(Enum):
    """Account commands, used to word validation messages"""
    OPEN = "open"
    CLOSE = "close"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


MISSING_DATA = {
    Task.OPEN: "Missing data for opening an account.",
    Task.CLOSE: "Missing data for closing an account.",
}

NON_POSITIVE_AMOUNT = {
    Task.OPEN: "Initial deposit cannot be 0 or negative.",
    Task.DEPOSIT: "Deposit - amount cannot be 0 or negative.",
    Task.WITHDRAW: "Withdraw - amount cannot be 0 or negative.",
}


class Declined(BankError):
    """A command rejected during validation; the message is shown as-is"""


class TransactionManager:
    """
    Processes bank commands one line at a time
    """

    def __init__(
        self,
        database: Optional[AccountDatabase] = None,
        catalog: Optional[ProductCatalog] = None,
        today: Callable[[], date] = date.today
    ):
        self.database = database if database is not None else AccountDatabase()
        self.catalog = catalog or ProductCatalog()
        self.today = today

    def run(self, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
        """Read commands until Q or end of input"""
        print("Transaction Manager is running.", file=stdout)
        for line in stdin:
            for output in self.process(line):
                print(output, file=stdout)
            if line.strip() == CMD_QUIT:
                return

    def process(self, line: str) -> List[str]:
        """Execute one command line and return the lines to display"""
        tokens = line.split()
        if not tokens:
            return []

        command = tokens[0]
        handlers = {
            CMD_OPEN: self._open,
            CMD_CLOSE: self._close,
            CMD_DEPOSIT: self._deposit,
            CMD_WITHDRAW: self._withdraw,
        }
        if command in handlers:
            try:
                return [handlers[command](tokens)]
            except Declined as e:
                log_action(logger, "debug", "Command declined", action=command,
                           figures={"reason": str(e)})
                return [str(e)]
        if command == CMD_PRINT:
            return self._print_sorted()
        if command == CMD_PRINT_FEES:
            return self._print_fees_and_interests()
        if command == CMD_APPLY_FEES:
            return self._print_updated_balances()
        if command == CMD_QUIT:
            return ["Transaction Manager is terminated."]
        return ["Invalid command!"]

    # -------- account commands --------

    def _open(self, tokens: List[str]) -> str:
        account = self._make_account(tokens, Task.OPEN)
        label = self._label(account)

        if self.database.has_type_conflict(account):
            return f"{label} is already in the database."
        if not self.database.open(account):
            return f"{label} is already in the database."
        return f"{label} opened."

    def _close(self, tokens: List[str]) -> str:
        account = self._make_account(tokens, Task.CLOSE)
        label = self._label(account)

        if not self.database.close(account):
            return f"{label} is not in the database."
        return f"{label} has been closed."

    def _deposit(self, tokens: List[str]) -> str:
        account = self._make_account(tokens, Task.DEPOSIT)
        label = self._label(account)

        if not self.database.contains(account):
            return f"{label} is not in the database."
        self.database.deposit(account)
        return f"{label} Deposit - balance updated."

    def _withdraw(self, tokens: List[str]) -> str:
        account = self._make_account(tokens, Task.WITHDRAW)
        label = self._label(account)

        if not self.database.contains(account):
            return f"{label} is not in the database."
        if not self.database.withdraw(account):
            return f"{label} Withdraw - insufficient fund."
        return f"{label} Withdraw - balance updated."

    # -------- reports --------

    def _print_sorted(self) -> List[str]:
        if self.database.is_empty():
            return [EMPTY_DATABASE]
        lines = ["*Accounts sorted by account type and profile."]
        lines.extend(account.describe() for account in self.database.sorted_accounts())
        lines.append(END_OF_LIST)
        return lines

    def _print_fees_and_interests(self) -> List[str]:
        if self.database.is_empty():
            return [EMPTY_DATABASE]
        lines = ["*list of accounts with fee and monthly interest"]
        lines.extend(
            statement.describe_fees()
            for statement in self.database.fees_and_interests()
        )
        lines.append(END_OF_LIST)
        return lines

    def _print_updated_balances(self) -> List[str]:
        if self.database.is_empty():
            return [EMPTY_DATABASE]
        lines = ["*list of accounts with fees and interests applied."]
        lines.extend(
            statement.describe_updated()
            for statement in self.database.apply_fees_and_interests()
        )
        lines.append(END_OF_LIST)
        return lines

    # -------- validation --------

    def _make_account(self, tokens: List[str], task: Task) -> Account:
        """Validate the command fields and build a transient account"""
        account_type = self._account_type(tokens, task)
        holder = self._profile(tokens, task)

        if task is Task.CLOSE:
            return self.catalog.new_account(account_type, holder)

        amount = self._amount(tokens, task)
        if task is not Task.OPEN:
            return self.catalog.new_account(account_type, holder, amount)

        campus = None
        loyal = False
        if account_type is AccountType.COLLEGE_CHECKING:
            try:
                self.catalog.check_age_limit(account_type, holder, self.today())
            except OverageError as e:
                raise Declined(f"DOB invalid: {e}.")
            campus = self._campus(tokens, task)
        elif account_type is AccountType.SAVINGS:
            loyal = self._loyalty(tokens, task)
        elif account_type is AccountType.MONEY_MARKET:
            try:
                self.catalog.check_minimum_opening_balance(account_type, amount)
            except MinimumBalanceError:
                minimum = self.catalog.terms_for(account_type).minimum_opening_balance
                raise Declined(
                    f"Minimum of ${minimum.amount:.0f} to open a Money Market account."
                )

        return self.catalog.new_account(account_type, holder, amount, campus=campus, loyal=loyal)

    def _account_type(self, tokens: List[str], task: Task) -> AccountType:
        try:
            return AccountType.from_token(tokens[INDEX_TYPE])
        except (IndexError, UnknownAccountTypeError):
            raise Declined(self._missing_data(task))

    def _profile(self, tokens: List[str], task: Task) -> Profile:
        try:
            first_name = tokens[INDEX_FIRST_NAME]
            last_name = tokens[INDEX_LAST_NAME]
            dob_token = tokens[INDEX_DOB]
        except IndexError:
            raise Declined(self._missing_data(task))

        today = self.today()
        try:
            dob = CalendarDate.parse(dob_token)
        except DateFormatError:
            raise Declined(f"DOB invalid: {dob_token} not a valid calendar date!")
        if not dob.is_valid():
            raise Declined(f"DOB invalid: {dob_token} not a valid calendar date!")
        if not dob.is_before_today(today):
            raise Declined(f"DOB invalid: {dob_token} cannot be today or a future day.")

        holder = Profile(first_name, last_name, dob)
        try:
            self.catalog.check_holder(holder, today)
        except UnderageError as e:
            raise Declined(f"DOB invalid: {e}.")
        return holder

    def _amount(self, tokens: List[str], task: Task) -> Money:
        try:
            return parse_amount(tokens[INDEX_AMOUNT])
        except IndexError:
            raise Declined(self._missing_data(task))
        except NonPositiveAmountError:
            raise Declined(NON_POSITIVE_AMOUNT[task])
        except InvalidAmountError:
            raise Declined("Not a valid amount.")

    def _campus(self, tokens: List[str], task: Task) -> Campus:
        try:
            token = tokens[INDEX_CAMPUS]
        except IndexError:
            raise Declined(self._missing_data(task))
        try:
            return Campus.from_code(token)
        except InvalidCampusError:
            raise Declined("Invalid campus code.")

    def _loyalty(self, tokens: List[str], task: Task) -> bool:
        try:
            flag = tokens[INDEX_LOYALTY]
        except IndexError:
            raise Declined(self._missing_data(task))
        try:
            return parse_loyalty_flag(flag)
        except InvalidLoyaltyError:
            raise Declined(self._missing_data(task))

    @staticmethod
    def _missing_data(task: Task) -> str:
        return MISSING_DATA.get(task, "Missing data for making an account.")

    @staticmethod
    def _label(account: Account) -> str:
        return f"{account.holder}({account.account_type.code})"


def main() -> None:
    """Console entry point"""
    from .config import get_config
    from .logging_config import setup_logging

    config = get_config()
    setup_logging(level=config.log_level, format_type=config.log_format)
    TransactionManager(catalog=ProductCatalog(config)).run()
