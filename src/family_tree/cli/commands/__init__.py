"""
CLI command modules for family_tree.

Each command module defines a single Typer-compatible command function,
except ``member`` which groups the record-editing commands in a sub-app.
"""

from family_tree.cli.commands.export import export_command
from family_tree.cli.commands.member import member_app
from family_tree.cli.commands.show import show_command
from family_tree.cli.commands.stats import stats_command
from family_tree.cli.commands.validate import validate_command

__all__ = [
    "export_command",
    "member_app",
    "show_command",
    "stats_command",
    "validate_command",
]
