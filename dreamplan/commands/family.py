"""Family profile commands (setup, show, member editing)."""

import sqlite3
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreamplan.commands.admin import require_user_id
from dreamplan.dates import current_fiscal_year, fiscal_year_label
from dreamplan.domain.models import GENDERS, ROLES, FamilyMember, FamilyProfile, FiscalYear
from dreamplan.domain.profile import (
    add_member,
    default_members,
    new_member_id,
    remove_member,
    validate_members,
)
from dreamplan.store.queries import get_family_profile, save_family_profile
from dreamplan.store.schema import get_db_path

console = Console()


def require_profile(db_path: Path) -> FamilyProfile:
    """Load the family profile, or exit with a hint to run setup."""
    try:
        profile = get_family_profile(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        console.print("[dim]Run 'dreamplan init' if you have not set up dreamplan yet[/dim]")
        sys.exit(1)

    if profile is None:
        console.print("[yellow]No family profile yet. Run 'dreamplan setup' first.[/yellow]")
        sys.exit(1)
    return profile


def generate_member_id() -> str:
    """Create a fresh member identifier."""
    return new_member_id(int(time.time() * 1000), uuid.uuid4().hex[:9])


def store_profile(profile: FamilyProfile, user_id: str, db_path: Path) -> None:
    """Validate and save a profile, exiting on failure."""
    error = validate_members(profile.members)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        save_family_profile(profile, datetime.now().isoformat(), user_id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Error saving profile: {e}[/red]", style="bold")
        sys.exit(1)


def prompt_member(member: FamilyMember) -> FamilyMember:
    """Prompt for each field of a member, using its current values as defaults."""
    name = typer.prompt("  Name", default=member.name or None, type=str)
    birth_year = typer.prompt("  Birth year", default=member.birth_year, type=int)
    birth_month = typer.prompt("  Birth month (1-12)", default=member.birth_month, type=int)
    role = typer.prompt(f"  Role ({'/'.join(ROLES)})", default=member.role, type=str)
    gender = typer.prompt(f"  Gender ({'/'.join(GENDERS)}, '-' for none)", default=member.gender or "-", type=str)

    return FamilyMember(
        id=member.id,
        name=name.strip(),
        birth_year=birth_year,
        birth_month=birth_month,
        role=role.strip().lower(),
        gender=None if gender.strip() in ("", "-") else gender.strip().lower(),
    )


def setup_command(start_fy: int | None = None) -> None:
    """Interactively create or edit the family profile."""
    db_path = get_db_path()
    user_id = require_user_id()

    try:
        existing = get_family_profile(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[bold]Family setup[/bold]")
    console.print("[dim]Tell dreamplan who is in your family.[/dim]\n")

    default_start = existing.start_fy if existing else current_fiscal_year()
    if start_fy is None:
        start_fy = typer.prompt("Start fiscal year", default=default_start, type=int)

    members = existing.members if existing else default_members()
    edited: list[FamilyMember] = []

    for index, member in enumerate(members, start=1):
        console.print(f"\n[cyan]Member {index}[/cyan]")
        if existing and not typer.confirm("  Keep this member?", default=True):
            continue
        edited.append(prompt_member(member))

    while typer.confirm("\nAdd another member?", default=False):
        placeholder = FamilyMember(
            id=generate_member_id(),
            name="",
            birth_year=2020,
            birth_month=1,
            role="child",
            gender="female",
        )
        console.print(f"\n[cyan]Member {len(edited) + 1}[/cyan]")
        edited.append(prompt_member(placeholder))

    profile = FamilyProfile(start_fy=FiscalYear(start_fy), members=tuple(edited))
    store_profile(profile, user_id, db_path)

    console.print(f"\n[green]✓[/green] Saved family of {len(profile.members)} starting FY{profile.start_fy}")
    console.print("[dim]Run 'dreamplan timeline' to see your plan[/dim]")


def show_family_command() -> None:
    """Show the family profile."""
    db_path = get_db_path()
    profile = require_profile(db_path)

    table = Table(title=f"Family (timeline from {fiscal_year_label(profile.start_fy)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Born", justify="right")
    table.add_column("Role", style="magenta")
    table.add_column("Gender", style="dim")

    for member in profile.members:
        table.add_row(
            member.id,
            escape(member.name),
            f"{member.birth_year}-{member.birth_month:02d}",
            member.role,
            member.gender or "-",
        )

    console.print(table)


def add_member_command(
    name: str,
    birth_year: int,
    birth_month: int,
    role: str = "child",
    gender: str | None = None,
) -> None:
    """Add a member to the family profile."""
    db_path = get_db_path()
    user_id = require_user_id()
    profile = require_profile(db_path)

    member = FamilyMember(
        id=generate_member_id(),
        name=name.strip(),
        birth_year=birth_year,
        birth_month=birth_month,
        role=role,
        gender=gender,
    )
    updated = FamilyProfile(start_fy=profile.start_fy, members=add_member(profile.members, member))
    store_profile(updated, user_id, db_path)

    console.print(f"[green]✓[/green] Added {escape(member.name)} ({member.role}, born {birth_year}-{birth_month:02d})")
    console.print(f"[dim]ID: {member.id}[/dim]")


def remove_member_command(member_id: str) -> None:
    """Remove a member from the family profile."""
    db_path = get_db_path()
    user_id = require_user_id()
    profile = require_profile(db_path)

    member = next((m for m in profile.members if m.id == member_id), None)
    if member is None:
        console.print(f"[red]Member {escape(member_id)} not found[/red]")
        sys.exit(1)

    updated = FamilyProfile(start_fy=profile.start_fy, members=remove_member(profile.members, member_id))
    store_profile(updated, user_id, db_path)

    console.print(f"[green]✓[/green] Removed {escape(member.name)}")


def set_start_command(start_fy: int) -> None:
    """Change the first fiscal year of the timeline."""
    db_path = get_db_path()
    user_id = require_user_id()
    profile = require_profile(db_path)

    updated = FamilyProfile(start_fy=FiscalYear(start_fy), members=profile.members)
    store_profile(updated, user_id, db_path)

    console.print(f"[green]✓[/green] Timeline now starts at {fiscal_year_label(start_fy)}")
