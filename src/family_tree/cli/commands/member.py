from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.table import Table

from family_tree.cli.utils import cli_errors, console, load_store
from family_tree.render import full_name

member_app = typer.Typer(help="Add, edit, remove and list members")


def _data_option():
    return typer.Option(
        None,
        "--data",
        "-d",
        help="Member JSON file (defaults to paths.data_file from config)",
    )


def _collect(**fields: Any) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


@member_app.command("add")
def add_command(
    first_name: str = typer.Option(..., "--first-name", help="Given name"),
    last_name: str = typer.Option(..., "--last-name", help="Family name"),
    middle_name: Optional[str] = typer.Option(None, "--middle-name"),
    maiden_middle_name: Optional[str] = typer.Option(None, "--maiden-middle-name"),
    nick_name: Optional[str] = typer.Option(None, "--nick-name"),
    birthdate: Optional[str] = typer.Option(None, "--birthdate", help="YYYY-MM-DD"),
    deathdate: Optional[str] = typer.Option(None, "--deathdate", help="YYYY-MM-DD"),
    gender: Optional[str] = typer.Option(None, "--gender", help="male, female or other"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id"),
    spouse_id: Optional[str] = typer.Option(None, "--spouse-id"),
    child_order: Optional[int] = typer.Option(None, "--child-order"),
    photo_url: Optional[str] = typer.Option(None, "--photo-url"),
    data: Optional[Path] = _data_option(),
):
    """
    Add a member; a spouse is paired back automatically.
    """
    with cli_errors():
        store = load_store(data, must_exist=False)
        member = store.create(_collect(
            first_name=first_name,
            last_name=last_name,
            middle_name=middle_name,
            maiden_middle_name=maiden_middle_name,
            nick_name=nick_name,
            birthdate=birthdate,
            deathdate=deathdate,
            gender=gender,
            parent_id=parent_id,
            spouse_id=spouse_id,
            child_order=child_order,
            photo_url=photo_url,
        ))
        store.save()

    console.print(member.id)


@member_app.command("update")
def update_command(
    member_id: str = typer.Argument(..., help="Member id"),
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
    middle_name: Optional[str] = typer.Option(None, "--middle-name"),
    maiden_middle_name: Optional[str] = typer.Option(None, "--maiden-middle-name"),
    nick_name: Optional[str] = typer.Option(None, "--nick-name"),
    birthdate: Optional[str] = typer.Option(None, "--birthdate"),
    deathdate: Optional[str] = typer.Option(None, "--deathdate"),
    gender: Optional[str] = typer.Option(None, "--gender"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id"),
    spouse_id: Optional[str] = typer.Option(None, "--spouse-id"),
    child_order: Optional[int] = typer.Option(None, "--child-order"),
    photo_url: Optional[str] = typer.Option(None, "--photo-url"),
    clear_parent: bool = typer.Option(False, "--clear-parent", help="Remove the parent link"),
    clear_spouse: bool = typer.Option(False, "--clear-spouse", help="Remove the spouse link"),
    data: Optional[Path] = _data_option(),
):
    """
    Edit a member; changing the spouse unpairs the old one.
    """
    changes = _collect(
        first_name=first_name,
        last_name=last_name,
        middle_name=middle_name,
        maiden_middle_name=maiden_middle_name,
        nick_name=nick_name,
        birthdate=birthdate,
        deathdate=deathdate,
        gender=gender,
        parent_id=parent_id,
        spouse_id=spouse_id,
        child_order=child_order,
        photo_url=photo_url,
    )
    if clear_parent:
        changes["parent_id"] = None
    if clear_spouse:
        changes["spouse_id"] = None

    with cli_errors():
        store = load_store(data)
        store.update(member_id, changes)
        store.save()

    console.print(f"Updated {member_id}")


@member_app.command("delete")
def delete_command(
    member_id: str = typer.Argument(..., help="Member id"),
    data: Optional[Path] = _data_option(),
):
    """
    Remove a member and clear any spouse links to it.
    """
    with cli_errors():
        store = load_store(data)
        store.delete(member_id)
        store.save()

    console.print(f"Deleted {member_id}")


@member_app.command("list")
def list_command(
    data: Optional[Path] = _data_option(),
):
    """
    List members in creation order.
    """
    with cli_errors():
        store = load_store(data)

    table = Table(title="Members")
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Parent")
    table.add_column("Spouse")
    table.add_column("Order", justify="right")

    for m in store.list_members():
        table.add_row(
            m.id,
            full_name(m),
            m.parent_id or "",
            m.spouse_id or "",
            str(m.sort_order),
        )

    console.print(table)
