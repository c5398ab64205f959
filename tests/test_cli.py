"""End-to-end tests for the command line interface."""

import pytest

from ledgerlens.cli.main import cli


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _run(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _run


@pytest.fixture
def ledger(run):
    """Primary account, a card and some January activity."""
    steps = [
        ("account", "create", "Main Bank", "--primary"),
        ("account", "create", "Amex", "--type", "card", "--limit", "20000"),
        ("add", "income", "--account", "Main Bank", "--amount", "50,000",
         "--date", "2024-01-01", "--description", "Salary"),
        ("add", "transfer", "--from", "Main Bank", "--to", "cash", "--amount", "2000",
         "--date", "2024-01-02"),
        ("add", "expense", "--account", "cash", "--amount", "500",
         "--date", "2024-01-03", "--description", "Vegetables"),
        ("add", "expense", "--account", "Amex", "--amount", "3000",
         "--date", "2024-01-04", "--description", "Shoes"),
    ]
    for step in steps:
        result = run(*step)
        assert result.exit_code == 0, result.output
    return run


def test_help_does_not_need_a_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "balances" in result.output
    assert "feed" in result.output


def test_balances(ledger):
    result = ledger("balances")
    assert result.exit_code == 0
    assert "48,000.00" in result.output
    assert "Amex (card debt)" in result.output
    assert "3,000.00" in result.output
    assert "Cash Wallet" in result.output
    assert "1,500.00" in result.output
    assert "Primary + wallets" in result.output
    assert "49,500.00" in result.output


def test_primary_feed(ledger):
    result = ledger("feed", "Main Bank")
    assert result.exit_code == 0
    assert "Main Bank + wallets" in result.output
    assert "Balance: 49,500.00" in result.output
    assert "Shoes" in result.output
    assert "Salary" in result.output


def test_wallet_feed_search(ledger):
    result = ledger("feed", "cash", "--search", "veg")
    assert result.exit_code == 0
    assert "Cash Wallet" in result.output
    assert "Vegetables" in result.output
    assert "Transfer from" not in result.output


def test_feed_with_date_range(ledger):
    result = ledger("feed", "Amex", "--start-date", "2024-02-01")
    assert result.exit_code == 0
    assert "Balance: 3,000.00" in result.output
    assert "No transactions found." in result.output


def test_feed_unknown_view(ledger):
    result = ledger("feed", "Nowhere")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_loans(ledger):
    result = ledger(
        "loan", "add", "Ravi", "--type", "given", "--amount", "1000",
        "--account", "Main Bank", "--date", "2024-01-05",
    )
    assert result.exit_code == 0
    assert "Recorded loan for Ravi" in result.output
    assert "Outstanding: 1,000.00" in result.output

    result = ledger(
        "loan", "add", "Ravi", "--type", "given", "--entry", "repayment",
        "--amount", "400", "--account", "cash", "--date", "2024-01-06",
    )
    assert "Outstanding: 600.00" in result.output

    result = ledger("loan", "list")
    assert "Lent (owed to you)" in result.output
    assert "Net position: 600.00" in result.output

    result = ledger("feed", "Main Bank")
    assert "Loan to Ravi" in result.output
    assert "Repayment from Ravi" in result.output


def test_loans_empty(run):
    result = run("loan", "list")
    assert result.exit_code == 0
    assert "No loans found." in result.output


def test_reconcile(ledger):
    result = ledger("reconcile")
    assert "No actual balances recorded" in result.output

    ledger("account", "set-actual", "Main Bank", "47900")
    ledger("account", "set-wallet-actual", "cash", "1500")

    result = ledger("reconcile")
    assert result.exit_code == 0
    assert "off by 100.00" in result.output
    assert "OK" in result.output
    assert "Amex" not in result.output

    result = ledger("reconcile", "--all")
    assert "Amex" in result.output


def test_monthly_report(ledger):
    result = ledger("report", "monthly", "--month", "2024-01")
    assert result.exit_code == 0
    assert "Report for January 2024" in result.output
    assert "50,000.00" in result.output
    assert "3,500.00" in result.output


def test_bills(run):
    result = run("bill", "add", "Insurance", "--amount", "12000", "--due", "2099-01-01")
    assert result.exit_code == 0
    assert "Created bill 'Insurance'" in result.output

    result = run("bill", "list")
    assert "Insurance" in result.output
    assert "due in" in result.output


def test_pay_bill(run):
    assert run("account", "create", "Main Bank", "--primary").exit_code == 0
    run("bill", "add", "Internet", "--amount", "999", "--due", "2024-05-10",
        "--recurrence", "monthly")

    result = run("bill", "pay", "internet", "--date", "2024-05-08")
    assert result.exit_code == 0, result.output
    assert "Paid bill 'Internet': 999.00" in result.output
    assert "Next due: 2024-06-10" in result.output

    result = run("balances")
    assert "-999.00" in result.output

    result = run("feed", "Main Bank")
    assert "Bill Payment: Internet" in result.output


def test_pay_bill_without_primary(run):
    run("bill", "add", "Rent", "--amount", "15000", "--due", "2024-05-01")
    result = run("bill", "pay", "Rent")
    assert result.exit_code == 1
    assert "primary account" in result.output


def test_pay_unknown_bill(run):
    result = run("bill", "pay", "Water")
    assert result.exit_code == 1
    assert "Bill 'Water' not found" in result.output


def test_income_to_card_fails(ledger):
    result = ledger("add", "income", "--account", "Amex", "--amount", "10")
    assert result.exit_code == 1
    assert "card" in result.output


def test_invalid_amount(ledger):
    result = ledger("add", "expense", "--account", "cash", "--amount", "lots")
    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_transfer_to_same_account(ledger):
    result = ledger("add", "transfer", "--from", "cash", "--to", "cash", "--amount", "5")
    assert result.exit_code == 1
    assert "same account" in result.output
