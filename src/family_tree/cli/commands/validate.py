from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from family_tree.cli.utils import cli_errors, console, resolve_data_path
from family_tree.core.exceptions import FamilyTreeError
from family_tree.store import read_member_records
from family_tree.validation import ERROR, validate_members


def validate_command(
    data: Optional[Path] = typer.Argument(
        None,
        help="Member JSON file (defaults to paths.data_file from config)",
    ),
):
    """
    Check parent/spouse references; exits 1 when errors are found.
    """
    # Raw records, so duplicate ids are still visible
    with cli_errors():
        path = resolve_data_path(data)
        if not path.exists():
            raise FamilyTreeError(f"Member file not found: {path}")
        records = read_member_records(path)

    issues = validate_members(records)
    if not issues:
        console.print("[green]No issues found.[/green]")
        return

    table = Table(title="Validation Issues")
    table.add_column("Severity", style="bold")
    table.add_column("Code")
    table.add_column("Member")
    table.add_column("Message")
    for issue in issues:
        style = "red" if issue.severity == ERROR else "yellow"
        table.add_row(
            f"[{style}]{issue.severity}[/{style}]",
            issue.code,
            issue.member_id,
            issue.message,
        )
    console.print(table)

    if any(i.severity == ERROR for i in issues):
        raise typer.Exit(code=1)
