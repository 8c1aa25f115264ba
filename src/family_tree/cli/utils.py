from __future__ import annotations

import json
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

import typer
from rich.console import Console

from family_tree.builder import TreeBuilder, find_node
from family_tree.core.exceptions import FamilyTreeError
from family_tree.models import FamilyNode
from family_tree.store import MemberStore
from family_tree.utils import default_data_file

console = Console()
err_console = Console(stderr=True)


def resolve_data_path(path: Optional[Path]) -> Path:
    return path if path is not None else default_data_file()


def load_store(path: Optional[Path], *, must_exist: bool = True) -> MemberStore:
    path = resolve_data_path(path)
    if must_exist and not path.exists():
        raise FamilyTreeError(f"Member file not found: {path}")
    return MemberStore.open(path)


def load_tree(
    path: Optional[Path],
    *,
    verbose: bool = False,
) -> Tuple[MemberStore, List[FamilyNode]]:
    """
    Load members and build the displayed forest.
    """
    t0 = time.perf_counter()

    store = load_store(path)
    forest = TreeBuilder(store.list_members()).build()

    elapsed = time.perf_counter() - t0

    if verbose:
        err_console.log(f"Loaded {len(store)} member(s) and built tree in {elapsed:.3f}s")

    return store, forest


def focus_forest(forest: List[FamilyNode], focus: Optional[str]) -> List[FamilyNode]:
    """Narrow the forest to one couple; raise when the id is not in the tree."""
    if focus is None:
        return forest
    node = find_node(forest, focus)
    if node is None:
        raise FamilyTreeError(f"Family member not found in tree: {focus}")
    return [node]


def write_json(
    data: Any,
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report FamilyTreeError as a red message and exit 1."""
    try:
        yield
    except FamilyTreeError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
