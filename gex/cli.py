"""Command-line interface."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

import click
from rich.markup import escape
from rich.prompt import Prompt

from .exceptions import GexError, ProfileNotFoundError
from .git import ConfigScope
from .manager import ProfileManager
from .profile import Profile
from .switcher import ProfileSwitcher
from .ui import print_profile_details, print_profile_table, print_status, print_switch_result
from .ui_common import (
    confirm_action,
    console,
    print_error,
    print_hint,
    print_info,
    print_success,
)
from .version import __version__

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def get_switcher() -> ProfileSwitcher:
    return ProfileSwitcher.default()


def get_manager() -> ProfileManager:
    return get_switcher().manager


def handle_errors(f: F) -> F:
    """Decorator to handle errors in CLI commands."""
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except GexError as e:
            print_error(escape(str(e)))
            if e.details:
                console.print(f"[dim]{escape(e.details)}[/dim]")
            if e.hint:
                print_hint(escape(e.hint))
            raise click.Abort()
    return cast(F, wrapper)


@click.group()
@click.version_option(__version__, prog_name="gex")
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug: bool) -> None:
    """Switch between git identities."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")


@cli.command()
@click.argument("name")
@click.option("-u", "--username", required=True, help="GitHub username")
@click.option("-e", "--email", required=True, help="Git email address")
@click.option("-k", "--ssh-key", required=True, help="SSH key file name in ~/.ssh (e.g. id_ed25519_work)")
@handle_errors
def add(name: str, username: str, email: str, ssh_key: str) -> None:
    """Add a new profile."""
    profile = Profile(name=name, username=username, email=email, ssh_key_name=ssh_key)
    get_manager().create(profile)
    print_success(f"Profile '{escape(name)}' created")


@cli.command(name="list")
@handle_errors
def list_profiles() -> None:
    """List all profiles."""
    profiles = get_manager().get_all()
    if not profiles:
        print_info("No profiles found")
        console.print("Create one with: [command]gex add <name> --username <user> --email <email> --ssh-key <key>[/command]")
        return
    print_profile_table(profiles)


@cli.command()
@click.argument("name")
@click.option("-g", "--global", "global_", is_flag=True, help="Apply machine-wide instead of to the current repository")
@handle_errors
def switch(name: str, global_: bool) -> None:
    """Switch to a profile."""
    scope = ConfigScope.GLOBAL if global_ else ConfigScope.LOCAL
    result = get_switcher().switch(name, scope)
    print_switch_result(result)


@cli.command()
@click.argument("name")
@click.option("-u", "--username", help="New GitHub username")
@click.option("-e", "--email", help="New email address")
@click.option("-k", "--ssh-key", help="New SSH key file name")
@handle_errors
def edit(name: str, username: str | None, email: str | None, ssh_key: str | None) -> None:
    """Edit a profile.

    Fields not given as options are prompted for, with the current value as
    the default.
    """
    manager = get_manager()
    existing = manager.get(name)
    if existing is None:
        raise ProfileNotFoundError(name)

    if username is None and email is None and ssh_key is None:
        console.print(f"Editing profile [title]{escape(name)}[/title] (press Enter to keep current value)")
        username = Prompt.ask("Username", default=existing.username, console=console)
        email = Prompt.ask("Email", default=existing.email, console=console)
        ssh_key = Prompt.ask("SSH Key", default=existing.ssh_key_name, console=console)

    updated = Profile(
        name=name,
        username=username if username is not None else existing.username,
        email=email if email is not None else existing.email,
        ssh_key_name=ssh_key if ssh_key is not None else existing.ssh_key_name,
    )
    manager.update(name, updated)
    print_success(f"Profile '{escape(name)}' updated")
    print_profile_details(updated)


@cli.command()
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
@handle_errors
def delete(name: str, yes: bool) -> None:
    """Delete a profile and its SSH host entry."""
    switcher = get_switcher()
    if not switcher.manager.exists(name):
        raise ProfileNotFoundError(name)

    if not yes and not confirm_action(f"Delete profile '{escape(name)}'?", default=False):
        print_info("Deletion cancelled")
        return

    switcher.delete(name)
    print_success(f"Profile '{escape(name)}' deleted")


@cli.command()
@handle_errors
def status() -> None:
    """Show which profile is active globally and in this repository."""
    switcher = get_switcher()
    console.print(f"[dim]{escape(switcher.git_config.version())}[/dim]")
    print_status(switcher.status())
