"""Generate command for adding canonical life events to the timeline."""

import sqlite3
import sys
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreamplan.commands.admin import require_user_id
from dreamplan.commands.family import require_profile
from dreamplan.dates import fiscal_month_index
from dreamplan.domain.lifeevents import generate, to_dream_records, within_window
from dreamplan.domain.models import UserId
from dreamplan.store.queries import add_dreams
from dreamplan.store.schema import get_db_path

console = Console()


def generate_command(dry_run: bool = False) -> None:
    """Generate school milestones, coming of age and kanreki events.

    Events already in the database are not checked, so running this twice
    adds everything twice.
    """
    db_path = get_db_path()
    user_id = require_user_id()
    profile = require_profile(db_path)

    candidates = generate(profile)
    in_range = within_window(candidates, profile.start_fy)
    skipped = len(candidates) - len(in_range)

    if not in_range:
        console.print("[yellow]No life events fall inside the timeline[/yellow]")
        return

    table = Table(title=f"Life events (FY{profile.start_fy} - FY{profile.start_fy + 19})")
    table.add_column("FY", style="cyan")
    table.add_column("Month", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Title", style="white")

    for candidate in sorted(in_range, key=lambda c: (c.fy, fiscal_month_index(c.month))):
        table.add_row(str(candidate.fy), str(candidate.month), candidate.category, escape(candidate.title))

    console.print(table)
    if skipped:
        console.print(f"[dim]{skipped} event(s) outside the timeline were skipped[/dim]")

    if dry_run:
        console.print("[yellow]Dry run: nothing saved[/yellow]")
        return

    records = to_dream_records(in_range, UserId(user_id), datetime.now().isoformat())

    try:
        inserted = add_dreams(records, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to save life events: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Added {inserted} life events")
