"""Main CLI entry point."""

import logging

import click
from farmledger.database.factories import create_session_store, create_sqlite_database

# Import and register all commands at module level
from farmledger.cli.commands import (
    auth,
    expense,
    view,
    summary,
    user,
    init_farm,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FARMLEDGER_DB_PATH environment variable)",
    envvar="FARMLEDGER_DB_PATH",
)
@click.option(
    "--session-path",
    type=click.Path(),
    help="Path to session file (overrides FARMLEDGER_SESSION_PATH environment variable)",
    envvar="FARMLEDGER_SESSION_PATH",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, session_path: str | None, debug: bool):
    """FarmLedger - Farm expense tracking application.

    Record farm expenses, track unpaid bills and watch the balance left from
    your total investment.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("farmledger").setLevel(logging.DEBUG if debug else logging.WARNING)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["session_store"] = create_session_store(session_path=session_path)
        ctx.call_on_close(db.disconnect)


# Register all commands
auth.register_commands(cli)
expense.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
user.register_commands(cli)
init_farm.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
