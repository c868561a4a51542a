"""
Test suite for the transaction manager

Drives the command processor end to end with a fixed current date.
"""

import io
from datetime import date

import pytest

from retail_bank.config import BankConfig
from retail_bank.products import ProductCatalog
from retail_bank.transaction_manager import TransactionManager

TODAY = date(2024, 6, 15)


@pytest.fixture
def manager():
    """Transaction manager with an empty database and a fixed date"""
    return TransactionManager(catalog=ProductCatalog(BankConfig()), today=lambda: TODAY)


def run_lines(manager, *lines):
    output = []
    for line in lines:
        output.extend(manager.process(line))
    return output


class TestOpenCommand:
    """Test the O command"""

    def test_open_each_type(self, manager):
        """Test well formed opens succeed"""
        assert run_lines(
            manager,
            "O C John Doe 2/19/2000 599.99",
            "O CC Jane Doe 10/1/2000 999.99 0",
            "O S april March 1/15/1987 1500 1",
            "O MM Roy Brooks 10/31/1979 2909.10",
        ) == [
            "John Doe 2/19/2000(C) opened.",
            "Jane Doe 10/1/2000(CC) opened.",
            "april March 1/15/1987(S) opened.",
            "Roy Brooks 10/31/1979(MM) opened.",
        ]

    def test_type_token_is_case_insensitive(self, manager):
        """Test lower case type tokens are accepted"""
        assert manager.process("O mm Roy Brooks 10/31/1979 2909.10") == [
            "Roy Brooks 10/31/1979(MM) opened."
        ]

    def test_duplicate_open(self, manager):
        """Test opening the same account twice"""
        manager.process("O C John Doe 2/19/2000 599.99")
        assert manager.process("O C john DOE 2/19/2000 100") == [
            "john DOE 2/19/2000(C) is already in the database."
        ]

    def test_checking_exclusion_both_ways(self, manager):
        """Test checking and college checking exclude each other"""
        assert run_lines(
            manager,
            "O C John Doe 2/19/2003 100",
            "O CC John Doe 2/19/2003 100 1",
            "O CC Jane Doe 2/19/2003 100 1",
            "O C Jane Doe 2/19/2003 100",
        ) == [
            "John Doe 2/19/2003(C) opened.",
            "John Doe 2/19/2003(CC) is already in the database.",
            "Jane Doe 2/19/2003(CC) opened.",
            "Jane Doe 2/19/2003(C) is already in the database.",
        ]

    @pytest.mark.parametrize("line,message", [
        ("O C John Doe 2/30/2000 100", "DOB invalid: 2/30/2000 not a valid calendar date!"),
        ("O C John Doe 2-19-2000 100", "DOB invalid: 2-19-2000 not a valid calendar date!"),
        ("O C John Doe 6/15/2024 100", "DOB invalid: 6/15/2024 cannot be today or a future day."),
        ("O C John Doe 1/1/2030 100", "DOB invalid: 1/1/2030 cannot be today or a future day."),
        ("O C John Doe 7/1/2008 100", "DOB invalid: 7/1/2008 under 16."),
        ("O C John Doe 2/19/2000 abc", "Not a valid amount."),
        ("O C John Doe 2/19/2000 1e30", "Not a valid amount."),
        ("O C John Doe 2/19/2000 99999999999999999999999999999", "Not a valid amount."),
        ("O C John Doe 2/19/2000 0.004", "Not a valid amount."),
        ("O C John Doe 2/19/2000 0", "Initial deposit cannot be 0 or negative."),
        ("O C John Doe 2/19/2000 -5", "Initial deposit cannot be 0 or negative."),
        ("O CC John Doe 6/15/2000 100 0", "DOB invalid: 6/15/2000 over 24."),
        ("O CC John Doe 2/19/2003 100 3", "Invalid campus code."),
        ("O CC John Doe 2/19/2003 100", "Missing data for opening an account."),
        ("O S John Doe 2/19/2000 100 2", "Missing data for opening an account."),
        ("O S John Doe 2/19/2000 100", "Missing data for opening an account."),
        ("O MM John Doe 2/19/2000 1999.99", "Minimum of $2000 to open a Money Market account."),
        ("O X John Doe 2/19/2000 100", "Missing data for opening an account."),
        ("O C John Doe", "Missing data for opening an account."),
        ("O C John Doe 2/19/2000", "Missing data for opening an account."),
    ])
    def test_declined_opens(self, manager, line, message):
        """Test each validation failure is reported and nothing is opened"""
        assert manager.process(line) == [message]
        assert manager.database.is_empty()


class TestCloseCommand:
    """Test the C command"""

    def test_close_open_account(self, manager):
        """Test closing needs only type and profile"""
        manager.process("O CC Jane Doe 10/1/2000 999.99 0")
        assert manager.process("C CC Jane Doe 10/1/2000") == ["Jane Doe 10/1/2000(CC) has been closed."]
        assert manager.database.is_empty()

    def test_close_missing_account(self, manager):
        """Test closing an account that is not open"""
        assert manager.process("C S John Doe 2/19/2000") == ["John Doe 2/19/2000(S) is not in the database."]

    def test_close_missing_fields(self, manager):
        """Test closing without a date of birth"""
        assert manager.process("C S John Doe") == ["Missing data for closing an account."]


class TestDepositWithdrawCommands:
    """Test the D and W commands"""

    def test_deposit(self, manager):
        """Test a deposit to an open account"""
        manager.process("O S John Doe 2/19/2000 100 0")
        assert manager.process("D S John Doe 2/19/2000 50") == ["John Doe 2/19/2000(S) Deposit - balance updated."]
        assert manager.process("P")[1] == "Savings::John Doe 2/19/2000::Balance $150.00"

    def test_deposit_to_missing_account(self, manager):
        """Test depositing to an account that is not open"""
        assert manager.process("D S John Doe 2/19/2000 50") == ["John Doe 2/19/2000(S) is not in the database."]

    def test_deposit_non_positive(self, manager):
        """Test deposit amount validation"""
        assert manager.process("D S John Doe 2/19/2000 0") == ["Deposit - amount cannot be 0 or negative."]

    def test_deposit_missing_amount(self, manager):
        """Test deposit without an amount"""
        assert manager.process("D S John Doe 2/19/2000") == ["Missing data for making an account."]

    def test_withdraw(self, manager):
        """Test withdrawals succeed until funds run out"""
        manager.process("O C John Doe 2/19/2000 100")
        assert run_lines(
            manager,
            "W C John Doe 2/19/2000 60",
            "W C John Doe 2/19/2000 60",
            "W C John Doe 2/19/2000 -1",
        ) == [
            "John Doe 2/19/2000(C) Withdraw - balance updated.",
            "John Doe 2/19/2000(C) Withdraw - insufficient fund.",
            "Withdraw - amount cannot be 0 or negative.",
        ]

    def test_college_checking_deposit_needs_no_campus(self, manager):
        """Test campus is only required when opening"""
        manager.process("O CC Jane Doe 10/1/2000 100 2")
        assert manager.process("D CC Jane Doe 10/1/2000 10") == ["Jane Doe 10/1/2000(CC) Deposit - balance updated."]


class TestReportCommands:
    """Test the P, PI and UB commands"""

    def test_empty_database(self, manager):
        """Test reports on an empty database"""
        for command in ("P", "PI", "UB"):
            assert manager.process(command) == ["Account Database is empty!"]

    def test_sorted_listing(self, manager):
        """Test the listing groups by type then holder"""
        run_lines(
            manager,
            "O S april March 1/15/1987 1500 1",
            "O C John Doe 2/19/2000 599.99",
            "O C Jane Doe 2/19/2000 599.99",
        )
        assert manager.process("P") == [
            "*Accounts sorted by account type and profile.",
            "Checking::Jane Doe 2/19/2000::Balance $599.99",
            "Checking::John Doe 2/19/2000::Balance $599.99",
            "Savings::april March 1/15/1987::Balance $1,500.00::is loyal",
            "*end of list.",
        ]

    def test_fees_and_interest_listing(self, manager):
        """Test PI shows figures without changing balances"""
        manager.process("O C John Doe 2/19/2000 599.99")
        assert manager.process("PI") == [
            "*list of accounts with fee and monthly interest",
            "Checking::John Doe 2/19/2000::Balance $599.99::fee $12.00::monthly interest $0.50",
            "*end of list.",
        ]
        assert manager.process("P")[1] == "Checking::John Doe 2/19/2000::Balance $599.99"

    def test_updated_balances(self, manager):
        """Test UB applies interest and fees"""
        manager.process("O C John Doe 2/19/2000 599.99")
        assert manager.process("UB") == [
            "*list of accounts with fees and interests applied.",
            "Checking::John Doe 2/19/2000::Balance $588.49",
            "*end of list.",
        ]
        assert manager.process("P")[1] == "Checking::John Doe 2/19/2000::Balance $588.49"


class TestRunLoop:
    """Test the console loop"""

    def test_invalid_and_blank_commands(self, manager):
        """Test unknown commands and blank lines"""
        assert manager.process("X") == ["Invalid command!"]
        assert manager.process("   ") == []

    def test_run_until_quit(self, manager):
        """Test the loop stops at Q and ignores later input"""
        stdin = io.StringIO("O C John Doe 2/19/2000 100\n\nQ\nO C Jane Doe 2/19/2000 100\n")
        stdout = io.StringIO()
        manager.run(stdin, stdout)
        assert stdout.getvalue().splitlines() == [
            "Transaction Manager is running.",
            "John Doe 2/19/2000(C) opened.",
            "Transaction Manager is terminated.",
        ]
        assert len(manager.database) == 1

    def test_oversized_amount_does_not_stop_the_loop(self, manager):
        """Test a declined amount line is reported and later commands still run"""
        stdin = io.StringIO("D C John Doe 2/19/2000 1e30\nO C John Doe 2/19/2000 100\nQ\n")
        stdout = io.StringIO()
        manager.run(stdin, stdout)
        assert stdout.getvalue().splitlines() == [
            "Transaction Manager is running.",
            "Not a valid amount.",
            "John Doe 2/19/2000(C) opened.",
            "Transaction Manager is terminated.",
        ]
