"""Rendering of profiles and switch results."""

from rich import box
from rich.markup import escape
from rich.table import Table

from .profile import Profile
from .switcher import ProfileStatus, SwitchResult
from .ui_common import console


def print_profile_table(profiles: list[Profile]) -> None:
    """Print profiles in a table format."""
    table = Table(
        title="Git Profiles",
        box=box.ROUNDED,
        header_style="bold cyan",
        border_style="blue"
    )

    table.add_column("Name", style="cyan")
    table.add_column("Username", style="blue")
    table.add_column("Email", style="green")
    table.add_column("SSH Key", style="magenta")

    for profile in profiles:
        table.add_row(
            escape(profile.name),
            escape(profile.username),
            escape(profile.email),
            escape(profile.ssh_key_name),
        )

    console.print(table)
    console.print()


def print_profile_details(profile: Profile, indent: str = "  ") -> None:
    console.print(f"{indent}Username: [highlight]{escape(profile.username)}[/highlight]")
    console.print(f"{indent}Email: [highlight]{escape(profile.email)}[/highlight]")
    console.print(f"{indent}SSH Key: [path]{escape(profile.ssh_key_name)}[/path]")


def print_switch_result(result: SwitchResult) -> None:
    console.print(f"\n[success]✓[/success] Switched to profile [title]{escape(result.profile.name)}[/title]")
    print_profile_details(result.profile)
    console.print(f"  Key path: [path]{escape(str(result.key_path))}[/path]")
    console.print(f"  Scope: {result.scope}")


def print_status(status: ProfileStatus) -> None:
    """Print which stored profile is active at each scope."""
    for label, profile in (
        ("Global", status.global_profile),
        ("Local", status.local_profile),
    ):
        console.print(f"\n[title]{label} profile[/title]")
        if profile is None:
            console.print("  [dim]No matching profile[/dim]")
        else:
            console.print(f"  Name: [highlight]{escape(profile.name)}[/highlight]")
            print_profile_details(profile)
    console.print()
