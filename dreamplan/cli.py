"""CLI entry point for dreamplan."""

import typer

from dreamplan.commands.admin import backup_command, init_command
from dreamplan.commands.dreams import add_command, delete_command, edit_command, list_command
from dreamplan.commands.family import (
    add_member_command,
    remove_member_command,
    set_start_command,
    setup_command,
    show_family_command,
)
from dreamplan.commands.generate import generate_command
from dreamplan.commands.timeline import timeline_command

app = typer.Typer(
    name="dreamplan",
    help="Family Dream Planner - plan your family's future by fiscal year",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Family Dream Planner - plan your family's future by fiscal year."""
    pass


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.dreamplan/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update database schema only"),
    name: str = typer.Option("", "--name", help="Your display name"),
) -> None:
    """Initialize dreamplan database and configuration."""
    init_command(force, migrate, name)


@app.command()
def setup(
    start_fy: int = typer.Option(None, "--start-fy", help="First fiscal year of the timeline"),
) -> None:
    """Set up or edit your family interactively."""
    setup_command(start_fy)


@app.command(name="family")
def family() -> None:
    """Show your family members."""
    show_family_command()


@app.command(name="add-member")
def add_member(
    name: str,
    birth_year: int = typer.Option(..., "--year", help="Birth year"),
    birth_month: int = typer.Option(..., "--month", help="Birth month (1-12)"),
    role: str = typer.Option("child", "--role", help="parent, child or student"),
    gender: str = typer.Option(None, "--gender", help="male or female"),
) -> None:
    """Add a member to your family."""
    add_member_command(name, birth_year, birth_month, role, gender)


@app.command(name="remove-member")
def remove_member(member_id: str) -> None:
    """Remove a member from your family (see 'dreamplan family' for IDs)."""
    remove_member_command(member_id)


@app.command(name="set-start")
def set_start(start_fy: int) -> None:
    """Change the first fiscal year of your timeline."""
    set_start_command(start_fy)


@app.command()
def timeline(
    from_fy: int = typer.Option(None, "--from", help="First fiscal year to show"),
    years: int = typer.Option(None, "--years", help="Number of fiscal years to show"),
) -> None:
    """Show your family timeline by fiscal year."""
    timeline_command(from_fy, years)


@app.command()
def add(
    title: str,
    fy: int = typer.Option(None, "--fy", help="Fiscal year (April start)"),
    month: int = typer.Option(None, "--month", help="Calendar month (1-12)"),
    date: str = typer.Option(None, "--date", help="Any date in the event's month, instead of --fy/--month"),
    category: str = typer.Option("life", "--category", "-c", help="education, travel, financial, life or career"),
    description: str = typer.Option(None, "--description", "-d", help="Notes"),
) -> None:
    """Add a plan or dream to a fiscal year."""
    add_command(title, fy, month, date, category, description)


@app.command()
def edit(
    dream_id: int,
    title: str = typer.Option(None, "--title", help="New title"),
    fy: int = typer.Option(None, "--fy", help="New fiscal year"),
    month: int = typer.Option(None, "--month", help="New calendar month (1-12)"),
    date: str = typer.Option(None, "--date", help="New date, instead of --fy/--month"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    description: str = typer.Option(None, "--description", "-d", help="New notes"),
) -> None:
    """Edit a plan or dream."""
    edit_command(dream_id, title, fy, month, date, category, description)


@app.command()
def delete(dream_id: int) -> None:
    """Delete a plan or dream."""
    delete_command(dream_id)


@app.command(name="list")
def list_dreams(
    fy: int = typer.Option(None, "--fy", help="Only show one fiscal year"),
) -> None:
    """List your plans and dreams."""
    list_command(fy)


@app.command()
def generate(
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the events without saving them"),
) -> None:
    """Add school milestones, coming of age and kanreki to your timeline."""
    generate_command(dry_run)


if __name__ == "__main__":
    app()
