"""Tests for recurring template commands and the startup pass."""

from datetime import datetime

import pytest

from ledgerkit.cli.main import cli


def _invoke(cli_runner, temp_db, as_of, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--as-of", as_of, *args], **kwargs)


@pytest.fixture
def rent_db(cli_runner, temp_db):
    """Database with a monthly rent template starting 2024-01-15."""
    _invoke(cli_runner, temp_db, "2024-01-15", "init-categories")
    _invoke(cli_runner, temp_db, "2024-01-15", "account", "create", "KCB", "--opening-balance", "100000", "--id", "kcb")
    result = _invoke(
        cli_runner, temp_db, "2024-01-15",
        "recurring", "create", "Rent", "--type", "expense", "--amount", "25000", "--category", "Rent",
        "--frequency", "monthly", "--from", "KCB", "--id", "rent",
    )
    assert result.exit_code == 0
    return temp_db


def test_create_and_list(cli_runner, rent_db):
    result = _invoke(cli_runner, rent_db, "2024-01-20", "recurring", "list")

    assert result.exit_code == 0
    assert "Rent" in result.output
    assert "next 2024-02-15" in result.output
    assert "active" in result.output


def test_transfer_type_not_offered(cli_runner, rent_db):
    result = _invoke(
        cli_runner, rent_db, "2024-01-20",
        "recurring", "create", "Sweep", "--type", "transfer", "--amount", "1", "--category", "Transfer", "--frequency", "daily",
    )

    assert result.exit_code == 2


def test_startup_pass_materializes_due_template(cli_runner, rent_db):
    result = _invoke(cli_runner, rent_db, "2024-02-16", "account", "balance", "KCB")

    assert "KES 75,000.00" in result.output
    state = rent_db.load_state()
    assert len(state.transactions) == 1
    assert state.transactions[0].notes == "Auto: Rent"
    assert state.recurring_templates[0].last_processed == datetime(2024, 2, 16)

    # Same day again creates nothing
    again = _invoke(cli_runner, rent_db, "2024-02-16", "account", "balance", "KCB")
    assert "KES 75,000.00" in again.output


def test_startup_pass_can_be_disabled(cli_runner, rent_db):
    cli_runner.invoke(cli, ["--db-path", rent_db.database_path, "--as-of", "2024-02-16", "--no-process-recurring", "account", "list"])

    assert rent_db.load_state().transactions == ()


def test_process_command(cli_runner, rent_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", rent_db.database_path, "--as-of", "2024-05-01", "--no-process-recurring", "recurring", "process"],
    )

    assert result.exit_code == 0
    assert "Created: 1 transactions" in result.output
    assert "Auto: Rent" in result.output
    assert len(rent_db.load_state().transactions) == 1


def test_pause_and_resume(cli_runner, rent_db):
    paused = _invoke(cli_runner, rent_db, "2024-01-20", "recurring", "pause", "rent")
    assert "Paused recurring template 'Rent'" in paused.output

    _invoke(cli_runner, rent_db, "2024-03-01", "account", "list")
    assert rent_db.load_state().transactions == ()

    listing = _invoke(cli_runner, rent_db, "2024-03-01", "recurring", "list")
    assert "No recurring templates found" in listing.output
    assert "paused" in _invoke(cli_runner, rent_db, "2024-03-01", "recurring", "list", "--all").output

    _invoke(cli_runner, rent_db, "2024-03-01", "recurring", "resume", "rent")
    _invoke(cli_runner, rent_db, "2024-03-02", "account", "list")
    assert len(rent_db.load_state().transactions) == 1


def test_end_date_pauses_template(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "2023-12-01", "init-categories")
    _invoke(
        cli_runner, temp_db, "2023-12-01",
        "recurring", "create", "Gym", "--type", "expense", "--amount", "3000", "--category", "Entertainment",
        "--frequency", "monthly", "--end-date", "2024-01-01", "--id", "gym",
    )

    _invoke(cli_runner, temp_db, "2024-02-01", "account", "list")

    state = temp_db.load_state()
    assert state.recurring_templates[0].is_active is False
    assert state.transactions == ()


def test_delete_keeps_created_transactions(cli_runner, rent_db):
    _invoke(cli_runner, rent_db, "2024-02-16", "account", "list")

    result = _invoke(cli_runner, rent_db, "2024-02-16", "recurring", "delete", "rent", "--yes")

    assert result.exit_code == 0
    state = rent_db.load_state()
    assert state.recurring_templates == ()
    assert len(state.transactions) == 1


def test_unknown_template(cli_runner, rent_db):
    result = _invoke(cli_runner, rent_db, "2024-01-20", "recurring", "pause", "nope")

    assert result.exit_code == 1
    assert "not found" in result.output
