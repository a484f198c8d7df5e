"""CLI helpers for the login session and permission gates."""

from __future__ import annotations

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.auth import AuthService
from farmledger.domain.entities import User
from farmledger.domain.errors import PermissionDeniedError


def get_auth_service(ctx: click.Context) -> AuthService:
    """Return the auth service shared by all commands of this invocation."""
    auth = ctx.obj.get("auth")
    if auth is None:
        auth = AuthService(ctx.obj["db"], ctx.obj["session_store"])
        ctx.obj["auth"] = auth
    return auth


def require_login_or_exit(ctx: click.Context) -> User:
    """Return the logged-in user, or exit with a CLI error."""
    user = get_auth_service(ctx).get_current_user()
    if user is None:
        click.echo("Error: Not logged in. Run 'farmledger login' first.", err=True)
        ctx.exit(1)
    return user


def require_permission_or_exit(ctx: click.Context, permission: str) -> User:
    """Return the logged-in user if it holds permission, or exit with a CLI error."""
    try:
        return get_auth_service(ctx).require_permission(permission)
    except PermissionDeniedError as exc:
        handle_domain_error(ctx, exc)
