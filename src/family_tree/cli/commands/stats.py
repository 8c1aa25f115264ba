from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from family_tree.builder import collect_member_ids, collect_spouse_ids, forest_depth
from family_tree.cli.utils import cli_errors, console, load_tree


def stats_command(
    data: Optional[Path] = typer.Argument(
        None,
        help="Member JSON file (defaults to paths.data_file from config)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a member file.
    """
    with cli_errors():
        store, forest = load_tree(data, verbose=verbose)

    placed = collect_member_ids(forest)

    table = Table(title="Family Tree Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Members", str(len(store)))
    table.add_row("Root families", str(len(forest)))
    table.add_row("Couples", str(len(collect_spouse_ids(forest))))
    table.add_row("Generations", str(forest_depth(forest)))
    table.add_row("Not placed", str(len(store) - len(placed)))

    console.print(table)
