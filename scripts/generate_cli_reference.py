#!/usr/bin/env python3
"""Generate CLI reference documentation from the typer app."""

import inspect
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import dreamplan
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamplan.cli import app

# Sections in the order a new user meets them
COMMAND_GROUPS = {
    "Getting started": ["init", "setup", "backup"],
    "Family": ["family", "add-member", "remove-member", "set-start"],
    "Plans and dreams": ["add", "edit", "delete", "list", "generate"],
    "Timeline": ["timeline"],
}


def command_name_of(command_obj: Any) -> str:
    """Name a registered command the way typer exposes it."""
    if command_obj.name:
        return command_obj.name
    return command_obj.callback.__name__.replace("_", "-") if command_obj.callback else "unknown"


def format_option(param_name: str, option: Any) -> str:
    """Format an option with its flags, help text and default."""
    flags = list(getattr(option, "param_decls", None) or []) or [f"--{param_name.replace('_', '-')}"]
    line = "- " + ", ".join(f"`{flag}`" for flag in flags)

    if getattr(option, "help", None):
        line += f": {option.help}"

    default = getattr(option, "default", None)
    if default is ...:
        line += " (required)"
    elif default not in (None, False, ""):
        line += f" (default: {default})"

    return line


def generate_command_doc(command_name: str, command_obj: Any) -> str:
    """Generate documentation for a single command."""
    callback = command_obj.callback
    doc = (callback.__doc__ or "No description available.").strip()

    sig = inspect.signature(callback)
    args = [name for name, param in sig.parameters.items() if param.default is inspect.Parameter.empty]
    options = [
        (name, param.default) for name, param in sig.parameters.items() if hasattr(param.default, "param_decls")
    ]

    usage = " ".join([f"uv run dreamplan {command_name}", *(arg.upper() for arg in args)])
    lines = [f"### {command_name}", "", doc, "", "```bash", usage, "```", ""]

    if args:
        lines.extend(["**Arguments:**", ""])
        lines.extend(f"- `{arg.upper()}` (required)" for arg in args)
        lines.append("")

    if options:
        lines.extend(["**Options:**", ""])
        lines.extend(format_option(name, option) for name, option in options)
        lines.append("")

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    commands = {command_name_of(c): c for c in app.registered_commands}

    lines = [
        "---",
        "tags: [reference]",
        "---",
        "",
        "# CLI Commands Reference",
        "",
        "Complete reference for all dreamplan CLI commands and options.",
        "Fiscal years start in April and are labelled by the calendar year they start in.",
        "",
        "```bash",
        "uv run dreamplan [COMMAND] [OPTIONS]",
        "```",
        "",
    ]

    listed: set[str] = set()
    for section, names in COMMAND_GROUPS.items():
        lines.extend([f"## {section}", ""])
        for name in names:
            if name in commands:
                lines.append(generate_command_doc(name, commands[name]))
                listed.add(name)

    remaining = sorted(set(commands) - listed)
    if remaining:
        lines.extend(["## Other", ""])
        lines.extend(generate_command_doc(name, commands[name]) for name in remaining)

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
