"""Login, logout and whoami commands."""

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.session import get_auth_service, require_login_or_exit
from farmledger.domain.errors import InvalidCredentialsError


@click.command("login")
@click.option("--email", prompt=True, help="Email address of the user")
@click.option("--password", prompt=True, hide_input=True, help="Password (at least 6 characters)")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in and remember the session for later commands."""
    auth = get_auth_service(ctx)
    try:
        user = auth.login(email, password)
    except InvalidCredentialsError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Login successful! Welcome, {user.name}")
    if user.farm_name:
        click.echo(f"  Farm: {user.farm_name}")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Forget the current session."""
    get_auth_service(ctx).logout()
    click.echo("Logged out successfully")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    user = require_login_or_exit(ctx)
    click.echo(f"{user.name} <{user.email}>")
    click.echo(f"  Farm: {user.farm_name or '-'}")
    click.echo(f"  Role: {user.role.value}")
    click.echo(f"  Permissions: {', '.join(sorted(user.permissions)) or '-'}")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
