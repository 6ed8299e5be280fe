"""Dream management commands (add, edit, delete, list)."""

import sqlite3
import sys
from dataclasses import replace
from datetime import datetime

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreamplan.commands.admin import require_user_id
from dreamplan.dates import fiscal_month_index, fiscal_year_label, fiscal_year_of
from dreamplan.domain.models import CATEGORY_LABELS, FiscalYear, UserId
from dreamplan.domain.profile import validate_category, validate_dream_title
from dreamplan.store.queries import add_dream, delete_dream, get_all_dreams, get_dream, update_dream
from dreamplan.store.schema import get_db_path

console = Console()


def parse_event_date(raw_date: str) -> tuple[FiscalYear, int]:
    """Map a free-form date onto a fiscal year and calendar month.

    Uses pandas.to_datetime so "2026-06", "June 2026" and "15/06/2026" all work.
    ISO dates are tried first; dayfirst would read "2026-02-10" as 2 October.

    Args:
        raw_date: Date string entered by the user.

    Returns:
        Tuple of (fiscal_year, month).

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        parsed = pd.to_datetime(raw_date, format="ISO8601")
    except (ValueError, pd.errors.ParserError):
        try:
            parsed = pd.to_datetime(raw_date, dayfirst=True)
        except (ValueError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}': no date given")

    return fiscal_year_of(parsed.year, parsed.month), parsed.month


def resolve_fy_and_month(fy: int | None, month: int | None, date: str | None) -> tuple[int, int]:
    """Work out where an event goes from --fy/--month or --date, exiting on bad input."""
    if date:
        try:
            return parse_event_date(date)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            sys.exit(1)

    if fy is None or month is None:
        console.print("[red]Provide --fy and --month, or --date[/red]")
        sys.exit(1)

    if not 1 <= month <= 12:
        console.print(f"[red]Month must be between 1 and 12 (got {month})[/red]")
        sys.exit(1)

    return fy, month


def add_command(
    title: str,
    fy: int | None = None,
    month: int | None = None,
    date: str | None = None,
    category: str = "life",
    description: str | None = None,
) -> None:
    """Add a plan or dream to a fiscal year.

    Args:
        title: Event title.
        fy: Fiscal year (with month).
        month: Calendar month within the fiscal year.
        date: Alternative to fy/month: any date inside the event's month.
        category: One of education, travel, financial, life, career.
        description: Optional free text.
    """
    db_path = get_db_path()
    user_id = require_user_id()

    error = validate_dream_title(title) or validate_category(category)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    target_fy, target_month = resolve_fy_and_month(fy, month, date)

    try:
        dream_id = add_dream(
            target_fy,
            target_month,
            category,
            title.strip(),
            description,
            created_at=datetime.now().isoformat(),
            user_id=UserId(user_id),
            db_path=db_path,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Failed to save dream: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Added to FY{target_fy} ({fiscal_year_label(target_fy)}):")
    console.print(f"  Title: {escape(title.strip())}")
    console.print(f"  Month: {target_month}")
    console.print(f"  Category: {CATEGORY_LABELS[category]}")
    console.print(f"[dim]ID: {dream_id}[/dim]")


def edit_command(
    dream_id: int,
    title: str | None = None,
    fy: int | None = None,
    month: int | None = None,
    date: str | None = None,
    category: str | None = None,
    description: str | None = None,
) -> None:
    """Edit a dream, replacing the whole record."""
    db_path = get_db_path()
    user_id = require_user_id()

    try:
        dream = get_dream(dream_id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if dream is None:
        console.print(f"[red]Dream {dream_id} not found[/red]")
        sys.exit(1)

    new_title = title if title is not None else dream.title
    new_category = category if category is not None else dream.category
    error = validate_dream_title(new_title) or validate_category(new_category)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    if date or fy is not None or month is not None:
        new_fy, new_month = resolve_fy_and_month(
            fy if fy is not None else dream.fy,
            month if month is not None else dream.month,
            date,
        )
    else:
        new_fy, new_month = dream.fy, dream.month

    updated = replace(
        dream,
        fy=FiscalYear(new_fy),
        month=new_month,
        category=new_category,
        title=new_title.strip(),
        description=description if description is not None else dream.description,
        updated_at=datetime.now().isoformat(),
        user_id=UserId(user_id),
    )

    try:
        if not update_dream(updated, db_path):
            console.print(f"[red]Dream {dream_id} no longer exists[/red]")
            sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to update dream: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated dream {dream_id}:")
    console.print(f"  Title: {escape(updated.title)}")
    console.print(f"  When: FY{updated.fy}, month {updated.month}")
    console.print(f"  Category: {CATEGORY_LABELS.get(updated.category, updated.category)}")


def delete_command(dream_id: int) -> None:
    """Delete a dream."""
    db_path = get_db_path()

    try:
        deleted = delete_dream(dream_id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Delete error: {e}[/red]", style="bold")
        sys.exit(1)

    if not deleted:
        console.print(f"[red]Dream {dream_id} not found[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted dream {dream_id}")


def list_command(fy: int | None = None) -> None:
    """List dreams, grouped by fiscal year in fiscal month order."""
    db_path = get_db_path()

    try:
        dreams = get_all_dreams(db_path, fy)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not dreams:
        console.print("[yellow]No dreams found[/yellow]")
        return

    dreams = sorted(dreams, key=lambda d: (d.fy, fiscal_month_index(d.month)))

    table = Table(title=f"Dreams (showing {len(dreams)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("FY", style="cyan")
    table.add_column("Month", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Title", style="white")
    table.add_column("Description", style="dim")

    for dream in dreams:
        table.add_row(
            str(dream.id),
            str(dream.fy),
            str(dream.month),
            CATEGORY_LABELS.get(dream.category, dream.category),
            escape(dream.title),
            escape(dream.description or "-"),
        )

    console.print(table)
