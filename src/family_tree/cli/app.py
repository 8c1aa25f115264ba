from __future__ import annotations

import typer

from family_tree.cli.commands.export import export_command
from family_tree.cli.commands.member import member_app
from family_tree.cli.commands.show import show_command
from family_tree.cli.commands.stats import stats_command
from family_tree.cli.commands.validate import validate_command

app = typer.Typer(
    name="family-tree",
    help="Family tree builder, inspector, and exporter",
    add_completion=False,
)

app.command("show")(show_command)
app.command("export")(export_command)
app.command("stats")(stats_command)
app.command("validate")(validate_command)
app.add_typer(member_app, name="member")


def main():
    app()


if __name__ == "__main__":
    main()
