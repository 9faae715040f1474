"""End-to-end tests running the CLI against real SQLite files."""

import csv
import json
import os
import tempfile

import pytest

from ledgerkit.cli.main import cli
from ledgerkit.database.factories import create_sqlite_database


def _invoke(cli_runner, db_path, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", db_path, "--as-of", "2024-02-16", *args], **kwargs)


@pytest.fixture
def populated_db(cli_runner, temp_db):
    path = temp_db.database_path
    _invoke(cli_runner, path, "init-categories")
    _invoke(cli_runner, path, "account", "create", "KCB", "--type", "kcb_bank", "--opening-balance", "20000")
    _invoke(cli_runner, path, "account", "create", "M-Pesa", "--type", "mpesa")
    _invoke(cli_runner, path, "transaction", "add", "--type", "income", "--amount", "60000", "--category", "Salary", "--to", "KCB", "--date", "2024-02-01")
    _invoke(cli_runner, path, "transaction", "add", "--type", "transfer", "--amount", "5000", "--category", "Transfer", "--from", "KCB", "--to", "M-Pesa", "--date", "2024-02-02")
    _invoke(cli_runner, path, "transaction", "add", "--type", "expense", "--amount", "1500", "--category", "Food", "--from", "M-Pesa", "--date", "2024-02-03", "--notes", "Market")
    _invoke(cli_runner, path, "transaction", "add", "--type", "expense", "--amount", "6000", "--category", "Savings", "--from", "KCB", "--date", "2024-01-28")
    _invoke(cli_runner, path, "project", "create", "Car", "--target", "500000", "--account", "KCB")
    return temp_db


@pytest.fixture
def other_db_path():
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield db_path
    if os.path.exists(db_path):
        os.unlink(db_path)


def test_state_persists_between_invocations(cli_runner, populated_db):
    result = _invoke(cli_runner, populated_db.database_path, "account", "list")

    assert result.exit_code == 0
    assert "Net worth: 72,500.00" in result.output
    state = populated_db.load_state()
    assert len(state.transactions) == 4
    assert len(state.projects) == 1


def test_json_export_import_round_trip(cli_runner, populated_db, other_db_path, tmp_path):
    export_path = str(tmp_path / "backup.json")

    exported = _invoke(cli_runner, populated_db.database_path, "export", export_path)
    assert exported.exit_code == 0
    assert "2 accounts, 15 categories, 4 transactions" in exported.output
    with open(export_path, encoding="utf-8") as f:
        assert json.load(f)["version"] == 1

    imported = _invoke(cli_runner, other_db_path, "import", export_path)
    assert imported.exit_code == 0
    assert "Imported: 22 entities" in imported.output

    for args in (("account", "list"), ("stats", "monthly"), ("stats", "monthly", "--month", "1")):
        original = _invoke(cli_runner, populated_db.database_path, *args).output
        restored = _invoke(cli_runner, other_db_path, *args).output
        assert restored == original

    again = _invoke(cli_runner, other_db_path, "import", export_path)
    assert "Imported: 0 entities" in again.output
    assert "Skipped: 22 duplicates" in again.output


def test_import_with_dedupe(cli_runner, populated_db, other_db_path, tmp_path):
    export_path = str(tmp_path / "backup.json")
    _invoke(cli_runner, populated_db.database_path, "export", export_path)
    _invoke(cli_runner, other_db_path, "init-categories")

    result = _invoke(cli_runner, other_db_path, "import", export_path, "--dedupe")

    assert "Imported: 7 entities" in result.output
    assert "Skipped: 15 duplicates" in result.output


def test_import_invalid_file(cli_runner, temp_db, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2", encoding="utf-8")

    result = _invoke(cli_runner, temp_db.database_path, "import", str(bad))

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_csv_export_date_range(cli_runner, populated_db, tmp_path):
    export_path = str(tmp_path / "feb.csv")

    result = _invoke(
        cli_runner, populated_db.database_path,
        "export", export_path, "--format", "csv", "--start-date", "2024-02-01", "--end-date", "2024-02-29",
    )

    assert result.exit_code == 0
    assert "Exported 3 transactions" in result.output
    with open(export_path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Date", "Type", "Amount", "Category", "Notes"]
    assert [row[1] for row in rows[1:]] == ["income", "transfer", "expense"]
    assert rows[3][3] == "Food"
    assert rows[3][4] == "Market"


def test_export_rejects_reversed_range(cli_runner, populated_db, tmp_path):
    result = _invoke(
        cli_runner, populated_db.database_path,
        "export", str(tmp_path / "x.json"), "--start-date", "2024-03-01", "--end-date", "2024-02-01",
    )

    assert result.exit_code == 1
    assert "Start date must not be after end date" in result.output


def test_env_var_selects_database(cli_runner, populated_db, monkeypatch):
    monkeypatch.setenv("LEDGERKIT_DB_PATH", populated_db.database_path)

    result = cli_runner.invoke(cli, ["account", "list"])

    assert result.exit_code == 0
    assert "KCB" in result.output


def test_factory_uses_env_var(temp_db, monkeypatch):
    monkeypatch.setenv("LEDGERKIT_DB_PATH", temp_db.database_path)

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{temp_db.database_path}"
