"""End-to-end tests for the khata CLI."""

import re
from datetime import date

import click
import pytest

from khata.cli.commands.report import resolve_report_range
from khata.cli.main import cli
from khata.utils.date_parser import get_date_range


def _run(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


def _id(output: str) -> str:
    return re.search(r"\(ID: (\w+)\)", output).group(1)


def test_first_run_creates_default_profile(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "profile", "list")

    assert result.exit_code == 0
    assert "* Default Profile" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    db_path = tmp_path / "untouched.db"
    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "customer" in result.output
    assert not db_path.exists()


def test_ledger_workflow(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "customer", "add", "Ali", "--phone", "03001234567", "--amount", "500")
    assert result.exit_code == 0
    assert "Balance: 500.00 to receive" in result.output

    result = _run(cli_runner, temp_db, "txn", "got", "Ali", "200", "--notes", "cash")
    assert result.exit_code == 0
    assert "Balance: 300.00 to receive" in result.output
    receipt_id = _id(result.output)

    result = _run(cli_runner, temp_db, "txn", "gave", "ali", "400")
    assert result.exit_code == 0
    assert "Balance: 700.00 to receive" in result.output

    result = _run(cli_runner, temp_db, "txn", "delete", receipt_id, "--yes")
    assert result.exit_code == 0

    result = _run(cli_runner, temp_db, "customer", "show", "Ali")
    assert result.exit_code == 0
    assert "900.00 to receive" in result.output
    assert "Opening balance" in result.output
    assert "cash" not in result.output


def test_customer_give_and_totals(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali", "--amount", "500", "--receive")
    _run(cli_runner, temp_db, "customer", "add", "Sara", "--amount", "1,200", "--give")

    result = _run(cli_runner, temp_db, "customer", "totals")

    assert result.exit_code == 0
    assert "To receive: 500.00" in result.output
    assert "To give:    1,200.00" in result.output
    assert "700.00 to give" in result.output


def test_customer_list_search_edit_delete(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali Raza", "--phone", "03001234567")
    _run(cli_runner, temp_db, "customer", "add", "Babar")

    result = _run(cli_runner, temp_db, "customer", "list", "--search", "raza")
    assert "Ali Raza" in result.output
    assert "Babar" not in result.output

    result = _run(cli_runner, temp_db, "customer", "edit", "Babar", "--name", "Babar Azam")
    assert result.exit_code == 0
    assert "[BA]" in _run(cli_runner, temp_db, "customer", "list").output

    result = _run(cli_runner, temp_db, "customer", "delete", "Ali Raza", input="n\n")
    assert "Deletion cancelled." in result.output

    result = _run(cli_runner, temp_db, "customer", "delete", "Ali Raza", "--yes")
    assert result.exit_code == 0
    assert "Ali Raza" not in _run(cli_runner, temp_db, "customer", "list").output


def test_unknown_customer(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "txn", "got", "Nobody", "10")

    assert result.exit_code == 1
    assert "Customer 'Nobody' not found" in result.output


def test_ambiguous_customer_name(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali")
    _run(cli_runner, temp_db, "customer", "add", "Ali")

    result = _run(cli_runner, temp_db, "txn", "got", "Ali", "10")

    assert result.exit_code == 1
    assert "ambiguous" in result.output


@pytest.mark.parametrize("amount", ["abc", "0"])
def test_invalid_transaction_amount(cli_runner, temp_db, amount):
    _run(cli_runner, temp_db, "customer", "add", "Ali")

    result = _run(cli_runner, temp_db, "txn", "gave", "Ali", amount)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_backdated_transaction(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali")
    _run(cli_runner, temp_db, "txn", "gave", "Ali", "100", "--date", "2024-01-10")
    _run(cli_runner, temp_db, "txn", "got", "Ali", "30", "--date", "2024-01-05")

    result = _run(cli_runner, temp_db, "customer", "show", "Ali")

    assert "30.00 to give" in result.output
    assert "70.00 to receive" in result.output


def test_profiles_isolate_customers(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali")

    result = _run(cli_runner, temp_db, "profile", "create", "Shop", "--description", "Main shop", "--use")
    assert result.exit_code == 0
    assert "Switched to profile 'Shop'" in result.output

    assert "No customers found." in _run(cli_runner, temp_db, "customer", "list").output

    _run(cli_runner, temp_db, "profile", "use", "Default Profile")
    assert "Ali" in _run(cli_runner, temp_db, "customer", "list").output


def test_profile_rename_and_delete(cli_runner, temp_db):
    _run(cli_runner, temp_db, "profile", "create", "Shop")

    result = _run(cli_runner, temp_db, "profile", "rename", "Shop", "Big Shop")
    assert result.exit_code == 0
    assert "Big Shop" in _run(cli_runner, temp_db, "profile", "list").output

    result = _run(cli_runner, temp_db, "profile", "delete", "Big Shop", "--yes")
    assert result.exit_code == 0
    assert "Big Shop" not in _run(cli_runner, temp_db, "profile", "list").output


def test_deleting_active_profile_falls_back_on_next_run(cli_runner, temp_db):
    _run(cli_runner, temp_db, "profile", "create", "Shop")
    _run(cli_runner, temp_db, "profile", "delete", "Default Profile", "--yes")

    result = _run(cli_runner, temp_db, "profile", "list")
    assert "* Shop" in result.output


def test_batwa_workflow(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "batwa", "add", "50000", "--type", "income", "--category", "Salary")
    assert result.exit_code == 0
    assert "Recorded income of 50,000.00 under 'Salary'" in result.output

    _run(cli_runner, temp_db, "batwa", "add", "1,500", "--category", "Food", "--notes", "groceries")

    result = _run(cli_runner, temp_db, "batwa", "list", "--type", "expense")
    assert "Food" in result.output
    assert "Salary" not in result.output

    result = _run(cli_runner, temp_db, "batwa", "summary")
    assert "Income:  50,000.00" in result.output
    assert "Expense: 1,500.00" in result.output
    assert "Balance: 48,500.00" in result.output


def test_batwa_delete_missing(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "batwa", "delete", "nope")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_report(cli_runner, temp_db):
    _run(cli_runner, temp_db, "customer", "add", "Ali")
    _run(cli_runner, temp_db, "txn", "gave", "Ali", "100", "--date", "2024-01-10")
    _run(cli_runner, temp_db, "txn", "got", "Ali", "40", "--date", "2024-01-12")

    result = _run(cli_runner, temp_db, "report", "--from", "2024-01-01", "--to", "2024-01-31")

    assert result.exit_code == 0
    assert "Transactions: 2" in result.output
    assert "Total got:    40.00" in result.output
    assert "Total gave:   100.00" in result.output

    result = _run(cli_runner, temp_db, "report", "--from", "2023-01-01", "--to", "2023-01-31")
    assert "No transactions in this period." in result.output


def test_me(cli_runner, temp_db):
    assert "No details saved." in _run(cli_runner, temp_db, "me", "show").output

    result = _run(cli_runner, temp_db, "me", "set", "--name", "Ayesha", "--phone", "123")
    assert result.exit_code == 1
    assert "at least 10 digits" in result.output

    _run(cli_runner, temp_db, "me", "set", "--name", "Ayesha", "--phone", "03001234567")
    result = _run(cli_runner, temp_db, "me", "show")
    assert "Name:  Ayesha" in result.output
    assert "Phone: 03001234567" in result.output


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_report_range_rejects_period_with_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_report_range(_ctx(), start_date="2024-01-01", end_date=None, period="this-month")

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_report_range_defaults_to_this_month():
    assert resolve_report_range(_ctx(), start_date=None, end_date=None, period=None) == get_date_range(
        "this-month"
    )


def test_report_range_open_start():
    start, end = resolve_report_range(_ctx(), start_date=None, end_date="2024-02-01", period=None)
    assert start == date(1970, 1, 1)
    assert end == date(2024, 2, 1)
