"""Tests for category commands."""

from ledgerkit.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_init_categories(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "init-categories")

    assert result.exit_code == 0
    assert "Successfully created 15 categories" in result.output
    names = [c.name for c in temp_db.load_state().categories]
    assert "Savings" in names
    assert "OPEX - Petty Cash" in names


def test_init_categories_twice(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "init-categories")

    result = _invoke(cli_runner, temp_db, "init-categories")

    assert result.exit_code == 0
    assert "already exist" in result.output
    assert len(temp_db.load_state().categories) == 15


def test_category_create_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "category", "create", "Emergency Fund", "--type", "savings", "--group", "wealth")
    assert result.exit_code == 0
    assert "Created category 'Emergency Fund'" in result.output

    listing = _invoke(cli_runner, temp_db, "category", "list", "--type", "savings")
    assert "Emergency Fund" in listing.output
    assert "wealth" in listing.output


def test_category_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "category", "list")

    assert result.exit_code == 0
    assert "No categories found" in result.output


def test_category_update_case_insensitive_name(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "init-categories")

    result = _invoke(cli_runner, temp_db, "category", "update", "dining out", "--group", "need")

    assert result.exit_code == 0
    assert "Updated category '7'" in result.output
    category = next(c for c in temp_db.load_state().categories if c.id == "7")
    assert category.group.value == "need"


def test_category_delete(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "init-categories")

    result = _invoke(cli_runner, temp_db, "category", "delete", "Bundles", "--yes")

    assert result.exit_code == 0
    assert "Deleted category 'Bundles'" in result.output
    assert len(temp_db.load_state().categories) == 14


def test_category_not_found(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "category", "delete", "Ghost", "--yes")

    assert result.exit_code == 1
    assert "Category 'Ghost' not found" in result.output
