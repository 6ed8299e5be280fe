"""Timeline command for viewing the family plan by fiscal year."""

import sqlite3
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreamplan.commands.family import require_profile
from dreamplan.config import get_display_name, get_user_id
from dreamplan.dates import fiscal_year_label
from dreamplan.domain.models import CATEGORY_LABELS, DreamEvent, FiscalYearSnapshot, MemberYear
from dreamplan.domain.timeline import events_by_category, member_status, project
from dreamplan.store.queries import get_all_dreams
from dreamplan.store.schema import get_db_path

console = Console()

CATEGORY_COLORS = {
    "education": "blue",
    "travel": "green",
    "financial": "yellow",
    "life": "magenta",
    "career": "purple",
}


def format_member_cell(member_year: MemberYear) -> str:
    """Format a member's status for a timeline cell.

    Args:
        member_year: Projected member facts.

    Returns:
        Grade for children and students, age for everyone else.
    """
    status = member_status(member_year)
    if member_year.grade is None:
        return f"[dim]{status}[/dim]"
    if member_year.grade == "working adult":
        return f"[dim]{status}[/dim] ({member_year.age})"
    return f"[cyan]{status}[/cyan] ({member_year.age})"


def format_dream(dream: DreamEvent) -> str:
    """Format an event as a coloured one-liner."""
    color = CATEGORY_COLORS.get(dream.category, "white")
    return f"[{color}]●[/{color}] {dream.month:>2}/ {escape(dream.title)} [dim]#{dream.id}[/dim]"


def footer_user_label() -> str:
    """Display name from config, else the user ID prefix, else GUEST."""
    display_name = get_display_name()
    if display_name:
        return display_name
    user_id = get_user_id()
    return user_id[:8] if user_id else "GUEST"


def select_snapshots(
    snapshots: list[FiscalYearSnapshot], from_fy: int | None, years: int | None
) -> list[FiscalYearSnapshot]:
    """Pick the snapshots to display.

    Args:
        snapshots: Full projection.
        from_fy: Optional first fiscal year to display.
        years: Optional number of fiscal years to display.

    Returns:
        Contiguous slice of the projection.
    """
    selected = [s for s in snapshots if from_fy is None or s.fy >= from_fy]
    if years is not None:
        selected = selected[:years]
    return selected


def render_category_summary(snapshots: list[FiscalYearSnapshot]) -> None:
    """Print event counts per category across the displayed years."""
    totals: dict[str, int] = {}
    for snapshot in snapshots:
        for category, count in events_by_category(snapshot).items():
            totals[category] = totals.get(category, 0) + count

    if not totals:
        return

    parts = [f"{CATEGORY_LABELS.get(category, category)}: {count}" for category, count in sorted(totals.items())]
    console.print(f"[dim]{' | '.join(parts)}[/dim]")


def timeline_command(from_fy: int | None = None, years: int | None = None) -> None:
    """Show the family timeline."""
    if years is not None and years < 1:
        console.print(f"[red]--years must be at least 1 (got {years})[/red]")
        sys.exit(1)

    db_path = get_db_path()
    profile = require_profile(db_path)

    try:
        dreams = get_all_dreams(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    snapshots = select_snapshots(project(profile, dreams), from_fy, years)
    if not snapshots:
        console.print("[yellow]No fiscal years in range[/yellow]")
        return

    table = Table(title="Family Dream Timeline", show_lines=True)
    table.add_column("Fiscal year", style="bold", no_wrap=True)
    for member in profile.members:
        table.add_column(escape(member.name), justify="center")
    table.add_column("Plans & dreams")

    for snapshot in snapshots:
        cells = [f"FY{snapshot.fy}\n[dim]{fiscal_year_label(snapshot.fy)}[/dim]"]
        cells.extend(format_member_cell(m) for m in snapshot.members)
        cells.append("\n".join(format_dream(d) for d in snapshot.year_dreams) or "[dim]-[/dim]")
        table.add_row(*cells)

    console.print(table)
    render_category_summary(snapshots)

    console.print(f"[dim]FAMILY CFO | DASHBOARD | {escape(footer_user_label())}[/dim]")
