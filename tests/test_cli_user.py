"""Tests for user administration commands."""

from farmledger.cli.main import cli
from farmledger.domain.entities import Role


def _create_ravi(cli_runner, cli_args, *extra):
    return cli_runner.invoke(
        cli,
        cli_args
        + [
            "user",
            "create",
            "Ravi Kumar",
            "--email",
            "ravi@farm.com",
            "--password",
            "secret123",
            "--permission",
            "ledger",
            "--permission",
            "activities",
            *extra,
        ],
    )


def test_list_users(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["user", "list"])

    assert result.exit_code == 0
    assert "Found 1 user(s):" in result.output
    assert "admin@farm.com" in result.output


def test_create_user(cli_runner, logged_in_admin, temp_db):
    """Test creating a user inherits the admin's farm name."""
    result = _create_ravi(cli_runner, logged_in_admin)

    assert result.exit_code == 0, result.output
    assert "User created successfully!" in result.output

    user = temp_db.get_user_by_email("ravi@farm.com")
    assert user.role is Role.USER
    assert user.farm_name == "Green Acres Farm"
    assert user.permissions == frozenset({"ledger", "activities"})


def test_create_user_duplicate_email(cli_runner, logged_in_admin):
    _create_ravi(cli_runner, logged_in_admin)

    result = _create_ravi(cli_runner, logged_in_admin)

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_create_user_short_password(cli_runner, logged_in_admin, temp_db):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + ["user", "create", "Ravi", "--email", "ravi@farm.com", "--password", "123"],
    )

    assert result.exit_code == 1
    assert "at least 6 characters" in result.output
    assert temp_db.get_user_by_email("ravi@farm.com") is None


def test_create_user_invalid_email(cli_runner, logged_in_admin):
    result = cli_runner.invoke(
        cli,
        logged_in_admin + ["user", "create", "Ravi", "--email", "ravi", "--password", "secret123"],
    )

    assert result.exit_code == 1
    assert "Invalid email address" in result.output


def test_update_user(cli_runner, logged_in_admin, temp_db):
    _create_ravi(cli_runner, logged_in_admin)
    ravi = temp_db.get_user_by_email("ravi@farm.com")

    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + ["user", "update", str(ravi.id), "--role", "admin", "--permission", "admin"],
    )

    assert result.exit_code == 0, result.output
    assert "User updated successfully!" in result.output
    temp_db.disconnect()
    updated = temp_db.get_user(ravi.id)
    assert updated.role is Role.ADMIN
    assert updated.permissions == frozenset({"admin"})
    assert updated.name == "Ravi Kumar"


def test_update_user_clear_permissions(cli_runner, logged_in_admin, temp_db):
    _create_ravi(cli_runner, logged_in_admin)
    ravi = temp_db.get_user_by_email("ravi@farm.com")

    result = cli_runner.invoke(
        cli, logged_in_admin + ["user", "update", str(ravi.id), "--clear-permissions"]
    )

    assert result.exit_code == 0, result.output
    temp_db.disconnect()
    assert temp_db.get_user(ravi.id).permissions == frozenset()


def test_update_missing_user(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["user", "update", "999", "--name", "Nobody"])

    assert result.exit_code == 1
    assert "Failed to update user" in result.output


def test_update_self_refreshes_session(cli_runner, logged_in_admin):
    """Removing your own admin permission takes effect on the next command."""
    result = cli_runner.invoke(
        cli, logged_in_admin + ["user", "update", "1", "--permission", "ledger"]
    )
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, logged_in_admin + ["user", "list"])

    assert result.exit_code == 1
    assert "'admin' permission" in result.output


def test_delete_user(cli_runner, logged_in_admin, temp_db):
    _create_ravi(cli_runner, logged_in_admin)
    ravi = temp_db.get_user_by_email("ravi@farm.com")

    result = cli_runner.invoke(cli, logged_in_admin + ["user", "delete", str(ravi.id), "--yes"])

    assert result.exit_code == 0
    assert "User deleted successfully!" in result.output
    temp_db.disconnect()
    assert temp_db.get_user(ravi.id) is None


def test_delete_missing_user(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["user", "delete", "999", "--yes"])

    assert result.exit_code == 1
    assert "Failed to delete user" in result.output


def test_cannot_delete_self(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["user", "delete", "1", "--yes"])

    assert result.exit_code == 1
    assert "cannot delete your own account" in result.output


def test_user_commands_require_admin(cli_runner, logged_in_admin):
    _create_ravi(cli_runner, logged_in_admin)
    cli_runner.invoke(
        cli, logged_in_admin + ["login", "--email", "ravi@farm.com", "--password", "secret123"]
    )

    result = cli_runner.invoke(cli, logged_in_admin + ["user", "list"])

    assert result.exit_code == 1
    assert "'admin' permission" in result.output
