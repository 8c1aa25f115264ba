from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from family_tree.cli.utils import cli_errors, console, focus_forest, load_tree
from family_tree.config import get_config
from family_tree.render import focus_title, render_forest


def show_command(
    data: Optional[Path] = typer.Argument(
        None,
        help="Member JSON file (defaults to paths.data_file from config)",
    ),
    focus: Optional[str] = typer.Option(
        None,
        "--focus",
        "-f",
        help="Show only the family of this member id",
    ),
    no_dates: bool = typer.Option(
        False,
        "--no-dates",
        help="Hide birth/death dates",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Print the family tree.
    """
    cfg = get_config()

    with cli_errors():
        _, forest = load_tree(data, verbose=verbose)
        forest = focus_forest(forest, focus)

    if not forest:
        console.print("No family members yet.")
        return

    title = focus_title(forest[0]) if focus else cfg.tree.get("title", "Family Tree")
    show_dates = bool(cfg.tree.get("show_dates", True)) and not no_dates

    console.print(render_forest(forest, title, show_dates=show_dates))
