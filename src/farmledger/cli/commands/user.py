"""User administration commands."""

from typing import Optional

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import print_user_table
from farmledger.cli.session import get_auth_service, require_permission_or_exit
from farmledger.domain.entities import PERMISSION_ADMIN, PERMISSIONS, Role
from farmledger.domain.errors import DomainError
from farmledger.domain.user import UserService
from farmledger.domain.validation import parse_role, validate_permissions, validate_user_input

PERMISSION_CHOICE = click.Choice(list(PERMISSIONS), case_sensitive=False)
ROLE_CHOICE = click.Choice([r.value for r in Role], case_sensitive=False)


@click.group()
def user_group():
    """Manage users (requires the admin permission)."""
    pass


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    require_permission_or_exit(ctx, PERMISSION_ADMIN)
    users = UserService(ctx.obj["db"]).list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"\nFound {len(users)} user(s):")
    print_user_table(users)


@user_group.command("create")
@click.argument("name")
@click.option("--email", required=True, help="Email address (must be unique)")
@click.option("--password", prompt=True, hide_input=True, help="Initial password (at least 6 characters)")
@click.option("--farm-name", help="Farm name (defaults to your own farm)")
@click.option("--role", type=ROLE_CHOICE, default="user", show_default=True, help="User role")
@click.option(
    "--permission",
    "permissions",
    type=PERMISSION_CHOICE,
    multiple=True,
    help="Permission to grant (repeatable)",
)
@click.pass_context
def create_user(
    ctx,
    name: str,
    email: str,
    password: str,
    farm_name: Optional[str],
    role: str,
    permissions: tuple[str, ...],
):
    """Create a new user.

    Examples:
        farmledger user create "Ravi Kumar" --email ravi@farm.com --permission ledger --permission activities
    """
    admin = require_permission_or_exit(ctx, PERMISSION_ADMIN)
    service = UserService(ctx.obj["db"])

    try:
        validate_user_input(
            name=name, email=email, password=password, role=role, permissions=permissions
        )
        user = service.create_user(
            name=name.strip(),
            email=email.strip(),
            farm_name=farm_name if farm_name is not None else admin.farm_name,
            role=parse_role(role),
            permissions=validate_permissions(permissions),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"User created successfully! (ID: {user.id})")
    click.echo(f"  Name: {user.name}")
    click.echo(f"  Email: {user.email}")
    click.echo(f"  Permissions: {', '.join(sorted(user.permissions)) or '-'}")


@user_group.command("update")
@click.argument("user_id", type=int)
@click.option("--name", help="New name")
@click.option("--email", help="New email address")
@click.option("--farm-name", help="New farm name")
@click.option("--role", type=ROLE_CHOICE, help="New role")
@click.option(
    "--permission",
    "permissions",
    type=PERMISSION_CHOICE,
    multiple=True,
    help="Replace permissions with these (repeatable)",
)
@click.option("--clear-permissions", is_flag=True, help="Remove all permissions")
@click.pass_context
def update_user(
    ctx,
    user_id: int,
    name: Optional[str],
    email: Optional[str],
    farm_name: Optional[str],
    role: Optional[str],
    permissions: tuple[str, ...],
    clear_permissions: bool,
):
    """Update a user.

    Updates only the fields that are provided. If you update yourself, your
    session picks up the change.
    """
    require_permission_or_exit(ctx, PERMISSION_ADMIN)
    service = UserService(ctx.obj["db"], auth=get_auth_service(ctx))

    if permissions and clear_permissions:
        click.echo("Error: Cannot use --permission together with --clear-permissions", err=True)
        ctx.exit(1)

    new_permissions = None
    if permissions:
        new_permissions = permissions
    elif clear_permissions:
        new_permissions = ()

    if all(value is None for value in (name, email, farm_name, role, new_permissions)):
        click.echo("Nothing to update. Provide at least one field option.")
        return

    try:
        validate_user_input(
            name=name, email=email, role=role, permissions=new_permissions, partial=True
        )
        user = service.update_user(
            user_id,
            name=name.strip() if name is not None else None,
            email=email.strip() if email is not None else None,
            farm_name=farm_name,
            role=parse_role(role) if role is not None else None,
            permissions=validate_permissions(new_permissions) if new_permissions is not None else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if user is None:
        click.echo(f"Error: Failed to update user. User {user_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"User updated successfully! (ID: {user.id})")
    print_user_table([user])


@user_group.command("delete")
@click.argument("user_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_user(ctx, user_id: int, yes: bool):
    """Delete a user."""
    admin = require_permission_or_exit(ctx, PERMISSION_ADMIN)
    service = UserService(ctx.obj["db"])

    if admin.id == user_id:
        click.echo("Error: You cannot delete your own account", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete user {user_id}?"):
        click.echo("Deletion cancelled.")
        return

    if not service.delete_user(user_id):
        click.echo(f"Error: Failed to delete user. User {user_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"User deleted successfully! (ID: {user_id})")


def register_commands(cli):
    """Register user administration commands with main CLI."""
    cli.add_command(user_group, name="user")
