"""Tests for the scripted session command."""

from pathlib import Path

import pytest

from bankcore.cli.main import cli

SENTINEL = "00000 END_OF_FILE          A 00000.00"


@pytest.fixture
def seeded(accounts_path):
    Path(accounts_path).write_text(
        "00001 Alice                A 01000.00\n"
        "00002 Bob                  A 00250.00\n"
        f"{SENTINEL}\n"
    )
    return accounts_path


def account_line(accounts_path, account_id):
    for line in Path(accounts_path).read_text().splitlines():
        if line.startswith(account_id):
            return line
    return None


def transaction_codes(transactions_path):
    return [line[:2] for line in Path(transactions_path).read_text().splitlines()]


def test_withdrawal_limit_accumulates_across_lines(
    cli_runner, cli_paths, seeded, transactions_path
):
    """Test the per-login withdrawal limit spans every line of one session."""
    result = cli_runner.invoke(
        cli,
        [*cli_paths, "session", "--holder", "Alice"],
        input="withdraw 00001 400\nwithdraw 00001 400\n",
    )

    assert result.exit_code == 1
    assert "Error: line 2: Standard session withdrawal limit is $500.00" in result.output
    assert "1 accepted, 1 rejected" in result.output
    assert account_line(seeded, "00001").endswith("00600.00")
    assert transaction_codes(transactions_path) == ["01", "00"]


def test_rejected_line_keeps_earlier_entries(cli_runner, cli_paths, seeded, transactions_path):
    """Test a failed operation leaves earlier operations of the session applied."""
    result = cli_runner.invoke(
        cli,
        [*cli_paths, "session", "--holder", "Bob"],
        input="deposit 00002 100\nwithdraw 00002 300\nwithdraw 00002 50\n",
    )

    assert result.exit_code == 1
    assert "Insufficient funds" in result.output
    # Deposit credited at logout, after the 50.00 withdrawal
    assert account_line(seeded, "00002").endswith("00300.00")
    assert transaction_codes(transactions_path) == ["04", "01", "00"]


def test_script_file_argument(cli_runner, cli_paths, seeded, tmp_path, transactions_path):
    """Test reading operations from a script file."""
    script = tmp_path / "day.txt"
    script.write_text(
        "# morning\n"
        "\n"
        "transfer 00001 00002 100\n"
        "paybill 00001 ec 25\n"
    )

    result = cli_runner.invoke(cli, [*cli_paths, "session", str(script), "--holder", "Alice"])

    assert result.exit_code == 0
    assert "2 accepted, 0 rejected" in result.output
    assert account_line(seeded, "00001").endswith("00875.00")
    assert account_line(seeded, "00002").endswith("00350.00")
    assert transaction_codes(transactions_path) == ["02", "03", "00"]


def test_admin_script_with_quoted_name(cli_runner, cli_paths, seeded, transactions_path):
    """Test admin operations and quoted names containing spaces."""
    result = cli_runner.invoke(
        cli,
        [*cli_paths, "session", "--admin"],
        input='create "Mary Ann" 100\nchangeplan "Mary Ann" 00003\ndisable Bob 2\n',
    )

    assert result.exit_code == 0
    assert account_line(seeded, "00003") == f"00003 {'Mary Ann':<20} A 00100.00"
    assert account_line(seeded, "00002").startswith("00002 Bob")
    assert account_line(seeded, "00002")[27] == "D"
    assert transaction_codes(transactions_path) == ["05", "08", "07", "00"]


def test_malformed_lines_are_reported(cli_runner, cli_paths, seeded, transactions_path):
    """Test unknown operations and wrong argument counts are skipped."""
    result = cli_runner.invoke(
        cli,
        [*cli_paths, "session", "--holder", "Alice"],
        input="fly 00001\nwithdraw 00001\nwithdraw 00001 ten\nwithdraw 00001 10\n",
    )

    assert result.exit_code == 1
    assert "line 1: Unknown operation 'fly'" in result.output
    assert "line 2: Usage: withdraw ACCOUNT AMOUNT" in result.output
    assert "line 3: Could not parse amount" in result.output
    assert "1 accepted, 3 rejected" in result.output
    assert account_line(seeded, "00001").endswith("00990.00")


def test_admin_operation_in_standard_session(cli_runner, cli_paths, seeded):
    """Test admin-only lines are rejected in a standard session."""
    result = cli_runner.invoke(
        cli,
        [*cli_paths, "session", "--holder", "Alice"],
        input="create Zed 10\n",
    )

    assert result.exit_code == 1
    assert "line 1: Admin only" in result.output
    assert account_line(seeded, "00003") is None


def test_session_requires_identity(cli_runner, cli_paths, seeded):
    """Test the session command needs --holder or --admin."""
    result = cli_runner.invoke(cli, [*cli_paths, "session"], input="")

    assert result.exit_code == 2
    assert "--holder" in result.output
