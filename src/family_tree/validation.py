"""
Relational checks over a member collection.

The tree builder tolerates all of these (it degrades and logs); this pass
exists so callers can reject bad data before it is saved or rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from family_tree.core.exceptions import ValidationError
from family_tree.logging import get_logger
from family_tree.models import Member, coerce_members

log = get_logger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass(slots=True)
class Issue:
    code: str
    severity: str
    member_id: str
    message: str


def _find_parent_cycles(by_id: Dict[str, Member]) -> List[List[str]]:
    """Return each parent_id cycle once, as the ids along the loop."""
    done: set = set()
    cycles: List[List[str]] = []

    for start in by_id:
        if start in done:
            continue
        path: List[str] = []
        on_path: Dict[str, int] = {}
        current: Optional[str] = start
        while current is not None and current in by_id and current not in done:
            if current in on_path:
                cycles.append(path[on_path[current]:])
                break
            on_path[current] = len(path)
            path.append(current)
            parent = by_id[current].parent_id
            current = parent if parent != current else None
        done.update(path)

    return cycles


def validate_members(members: Iterable) -> List[Issue]:
    members = coerce_members(members)
    issues: List[Issue] = []
    by_id: Dict[str, Member] = {}

    for m in members:
        if m.id in by_id:
            issues.append(Issue("duplicate_id", ERROR, m.id, f"Duplicate member id {m.id}"))
            continue
        by_id[m.id] = m

    for m in by_id.values():
        if m.parent_id:
            if m.parent_id == m.id:
                issues.append(Issue("self_parent", ERROR, m.id, "Member is its own parent"))
            elif m.parent_id not in by_id:
                issues.append(Issue(
                    "dangling_parent", WARNING, m.id,
                    f"parent_id {m.parent_id} does not exist",
                ))

        if not m.spouse_id:
            continue
        if m.spouse_id == m.id:
            issues.append(Issue("self_spouse", ERROR, m.id, "Member is its own spouse"))
            continue
        spouse = by_id.get(m.spouse_id)
        if spouse is None:
            issues.append(Issue(
                "dangling_spouse", WARNING, m.id,
                f"spouse_id {m.spouse_id} does not exist",
            ))
        elif spouse.spouse_id is None:
            issues.append(Issue(
                "asymmetric_spouse", WARNING, m.id,
                f"spouse {spouse.id} does not point back",
            ))
        elif spouse.spouse_id != m.id:
            issues.append(Issue(
                "conflicting_spouse", WARNING, m.id,
                f"spouse {spouse.id} is paired with {spouse.spouse_id}",
            ))

    for cycle in _find_parent_cycles(by_id):
        issues.append(Issue(
            "parent_cycle", ERROR, cycle[0],
            "Parent cycle: " + " -> ".join(cycle + [cycle[0]]),
        ))

    log.debug("Validated %d member(s): %d issue(s)", len(by_id), len(issues))
    return issues


def ensure_valid(members: Iterable) -> None:
    """Raise ValidationError when any error-level issue is present."""
    errors = [i for i in validate_members(members) if i.severity == ERROR]
    if errors:
        raise ValidationError("; ".join(f"{i.member_id}: {i.message}" for i in errors))
