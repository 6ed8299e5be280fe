#!/usr/bin/env python3
"""Generate database schema reference documentation from actual schema."""

import re
import sqlite3
import sys
import tempfile
from pathlib import Path

# Add parent directory to path to import dreamplan
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamplan.store.schema import init_database


def parse_create_table(sql: str) -> tuple[str, list[dict[str, str]]]:
    """Parse CREATE TABLE SQL to extract table name and columns.

    Returns:
        Tuple of (table_name, columns) where columns is list of dicts with:
        - name: column name
        - type: column type
        - constraints: any constraints (PRIMARY KEY, NOT NULL, etc.)
    """
    table_match = re.search(r"CREATE TABLE.*?(\w+)\s*\(", sql, re.IGNORECASE)
    if not table_match:
        return "", []

    table_name = table_match.group(1)

    columns = []
    col_section = sql[sql.index("(") + 1 : sql.rindex(")")]

    # Columns added by ALTER TABLE are appended on the same line as the last one
    col_section = re.sub(r",\s*(?=\w+\s+[A-Z]+)", ",\n", col_section)
    lines = [line.strip() for line in col_section.split("\n") if line.strip()]

    for line in lines:
        if line.upper().startswith(("PRIMARY KEY (", "FOREIGN KEY", "UNIQUE (", "CHECK (")):
            continue

        parts = line.split()
        if len(parts) >= 2:
            col_name = parts[0]
            col_type = parts[1].rstrip(",")
            constraints = " ".join(parts[2:]).rstrip(",").strip()

            columns.append({"name": col_name, "type": col_type, "constraints": constraints})

    return table_name, columns


def generate_table_doc(table_name: str, columns: list[dict[str, str]], description: str) -> str:
    """Generate markdown documentation for a table."""
    lines = [
        f"### {table_name}",
        "",
        description,
        "",
        "| Column | Type | Constraints | Description |",
        "|--------|------|-------------|-------------|",
    ]

    col_descriptions = {
        # family_profile
        "start_fy": "First fiscal year shown on the timeline",
        "updated_at": "ISO timestamp of the last change",
        "updated_by": "User ID of the last editor",
        # family_members
        "position": "Display order within the family",
        "name": "Member display name",
        "birth_year": "Calendar year of birth",
        "birth_month": "Calendar month of birth (1-12)",
        "role": "parent, child or student",
        "gender": "male, female or NULL",
        # dreams
        "fy": "Fiscal year (April to March, labelled by starting year)",
        "month": "Calendar month within the fiscal year (1-12)",
        "category": "education, travel, financial, life or career",
        "title": "Event title",
        "description": "Optional notes",
        "created_at": "ISO timestamp of creation",
        "user_id": "Author's user ID (from config.toml)",
    }

    for col in columns:
        desc = col_descriptions.get(col["name"], "")
        if col["name"] == "id":
            desc = {
                "family_profile": "Always 1 (one profile per database)",
                "family_members": "Member ID (mem_<ms>_<random>)",
            }.get(table_name, "Unique identifier")

        constraints = col["constraints"] or "—"
        lines.append(f"| {col['name']} | {col['type']} | {constraints} | {desc} |")

    lines.append("")
    return "\n".join(lines)


def generate_schema_reference() -> str:
    """Generate complete schema reference documentation."""
    with tempfile.TemporaryDirectory() as tmp:
        temp_db = Path(tmp) / "dreamplan_schema_temp.db"
        init_database(temp_db)

        conn = sqlite3.connect(temp_db)
        cursor = conn.cursor()
        cursor.execute("SELECT sql FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'")
        tables_sql = cursor.fetchall()
        conn.close()

    lines = [
        "---",
        "tags: [reference]",
        "---",
        "",
        "# Database Schema Reference",
        "",
        "dreamplan uses SQLite to store the family profile and planned events locally.",
        "",
        "## Database Location",
        "",
        "Default: `~/.local/share/dreamplan/dreamplan.db` (respects `XDG_DATA_HOME`)",
        "",
        "## Tables",
        "",
    ]

    table_descriptions = {
        "family_profile": "The single family profile: where the timeline starts.",
        "family_members": "Members of the family profile, in display order.",
        "dreams": "Planned events and dreams, entered by hand or generated from birth dates.",
    }

    for sql_tuple in tables_sql:
        sql = sql_tuple[0]
        table_name, columns = parse_create_table(sql)
        if table_name:
            description = table_descriptions.get(table_name, "")
            lines.append(generate_table_doc(table_name, columns, description))

    lines.extend(
        [
            "## Indexes",
            "",
            "- `idx_dreams_fy`: Index on dreams(fy) for per-year lookups",
            "- `idx_members_position`: Index on family_members(position) for ordered reads",
            "",
        ]
    )

    lines.extend(
        [
            "## Notes",
            "",
            "- Saving the profile replaces all member rows.",
            "- Editing a dream replaces every field of the row; the last write wins.",
            "- Generated life events are ordinary dream rows. Generating twice stores duplicates.",
            "- The `updated_at` column on dreams was added in a migration. Older databases are updated by `dreamplan init --migrate`.",
            "",
        ]
    )

    return "\n".join(lines)


def main() -> None:
    """Generate and write schema reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "database-schema.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = generate_schema_reference()

    output_path.write_text(doc)
    print(f"Generated schema reference at {output_path}")


if __name__ == "__main__":
    main()
