from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from family_tree.builder import collect_member_ids
from family_tree.cli.utils import cli_errors, err_console, focus_forest, load_tree, write_json
from family_tree.exporter import forest_to_dicts


def export_command(
    data: Optional[Path] = typer.Argument(
        None,
        help="Member JSON file (defaults to paths.data_file from config)",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    focus: Optional[str] = typer.Option(
        None,
        "--focus",
        "-f",
        help="Export only the family of this member id",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export the built family tree to JSON (stdout by default).
    """
    with cli_errors():
        store, forest = load_tree(data, verbose=verbose)
        forest = focus_forest(forest, focus)

    payload = {
        "counts": {
            "members": len(store),
            "roots": len(forest),
            "placed": len(collect_member_ids(forest)),
        },
        "roots": forest_to_dicts(forest),
    }

    if verbose:
        err_console.log("Exporting JSON")

    write_json(payload, out=out, pretty=pretty)

    if verbose:
        err_console.log("Export complete")
