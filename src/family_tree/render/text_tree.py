from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from rich.text import Text
from rich.tree import Tree

from family_tree.models import FamilyNode, Member

GENDER_STYLES = {
    "male": "bold blue",
    "female": "bold magenta",
    "other": "bold purple",
}
DECEASED_MARK = "✝"


# ------------------------------------------------------------------ #
# Member card pieces
# ------------------------------------------------------------------ #

def display_name(member: Member) -> str:
    return member.nick_name or member.first_name


def full_name(member: Member) -> str:
    parts = [member.first_name, member.middle_name, member.last_name]
    name = " ".join(p for p in parts if p)
    if member.maiden_middle_name:
        name += f" ({member.maiden_middle_name})"
    return name


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_date(value: Optional[str]) -> Optional[str]:
    """'1950-03-03' -> 'Mar 3, 1950'; unparseable values come back unchanged."""
    if not value:
        return None
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def calculate_age(
    birthdate: Optional[str],
    deathdate: Optional[str] = None,
    today: Optional[date] = None,
) -> Optional[int]:
    """Whole years from birth to death, or to ``today`` for the living."""
    birth = _parse_date(birthdate)
    if birth is None:
        return None
    end = _parse_date(deathdate) if deathdate else None
    if end is None:
        end = today or date.today()

    age = end.year - birth.year
    if (end.month, end.day) < (birth.month, birth.day):
        age -= 1
    return age


def member_label(
    member: Member,
    *,
    show_dates: bool = True,
    today: Optional[date] = None,
) -> Text:
    label = Text(display_name(member), style=GENDER_STYLES.get(member.gender or "", "bold"))
    if member.deathdate:
        label.append(f" {DECEASED_MARK}", style="red")

    name = full_name(member)
    if name and name != display_name(member):
        label.append(f" {name}", style="dim")

    if show_dates:
        born = format_date(member.birthdate)
        if born:
            age = calculate_age(member.birthdate, member.deathdate, today=today)
            label.append(f" b. {born}")
            if age is not None:
                label.append(f" ({age})")
        died = format_date(member.deathdate)
        if died:
            label.append(f" d. {died}")
    return label


def couple_label(node: FamilyNode, **kwargs) -> Text:
    label = member_label(node.member, **kwargs)
    if node.spouse is not None:
        label.append(" & ", style="red")
        label.append_text(member_label(node.spouse.member, **kwargs))
    return label


def focus_title(node: FamilyNode) -> str:
    if node.spouse is not None:
        return f"{node.member.first_name} & {node.spouse.member.first_name}'s Family"
    return f"{node.member.first_name}'s Family"


# ------------------------------------------------------------------ #
# Tree rendering
# ------------------------------------------------------------------ #

def _add_couple(branch: Tree, node: FamilyNode, **kwargs) -> None:
    child_branch = branch.add(couple_label(node, **kwargs))
    for child in node.children:
        _add_couple(child_branch, child, **kwargs)


def render_forest(
    forest: Iterable[FamilyNode],
    title: str = "Family Tree",
    *,
    show_dates: bool = True,
    today: Optional[date] = None,
) -> Tree:
    """Build a rich Tree for the forest; print it with a rich Console."""
    tree = Tree(Text(title, style="bold underline"), guide_style="grey50")
    for root in forest:
        _add_couple(tree, root, show_dates=show_dates, today=today)
    return tree
