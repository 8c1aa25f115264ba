from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Mapping, Optional

from family_tree.core.exceptions import ValidationError


# -----------------------------
# Input record
# -----------------------------

@dataclass(slots=True)
class Member:
    """
    One genealogical record.

    Only ``id``, ``parent_id``, ``spouse_id`` and ``child_order`` mean anything
    to the tree builder; the remaining fields are payload carried through to
    renderers and exporters unchanged. Keys the model does not know about are
    kept in ``raw`` so a load/save cycle is lossless.
    """
    id: str
    first_name: str = ""
    last_name: str = ""
    middle_name: Optional[str] = None
    maiden_middle_name: Optional[str] = None
    nick_name: Optional[str] = None
    birthdate: Optional[str] = None
    deathdate: Optional[str] = None
    photo_url: Optional[str] = None
    gender: Optional[str] = None

    parent_id: Optional[str] = None
    spouse_id: Optional[str] = None
    child_order: Optional[int] = 0

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def sort_order(self) -> int:
        return self.child_order or 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Member":
        if not isinstance(data, Mapping):
            raise ValidationError(f"Member record must be an object, got {data!r}")

        known = {f.name for f in fields(cls)} - {"raw"}
        kwargs = {k: v for k, v in data.items() if k in known}
        raw = {k: v for k, v in data.items() if k not in known}

        if kwargs.get("id") in (None, ""):
            raise ValidationError(f"Member record without id: {dict(data)!r}")
        kwargs["id"] = str(kwargs["id"])

        # Empty strings from forms mean "unset" for references
        for ref in ("parent_id", "spouse_id"):
            value = kwargs.get(ref)
            if value in ("", None):
                kwargs[ref] = None
            else:
                kwargs[ref] = str(value)

        order = kwargs.get("child_order")
        if isinstance(order, str):
            try:
                kwargs["child_order"] = int(order) if order.strip() else 0
            except ValueError as exc:
                raise ValidationError(
                    f"child_order must be an integer, got {order!r}"
                ) from exc

        return cls(**kwargs, raw=raw)

    def to_dict(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "raw"}
        out.update(self.raw)
        return out


def coerce_members(records) -> List[Member]:
    """Accept Member instances or plain mappings and return Members."""
    return [r if isinstance(r, Member) else Member.from_dict(r) for r in records]


# -----------------------------
# Output node
# -----------------------------

@dataclass(eq=False)
class FamilyNode:
    """
    Builder output: a member plus an optional spouse and ordered children.

    A spouse node is a flat projection: it never has children of its own and
    its ``spouse`` points back at the primary node of the couple. Nodes compare
    by identity so the back-link never triggers recursive comparison.
    """
    member: Member
    spouse: Optional["FamilyNode"] = field(default=None, repr=False)
    children: List["FamilyNode"] = field(default_factory=list)

    # True on the flat projection attached as another node's spouse
    is_spouse: bool = False

    @property
    def id(self) -> str:
        return self.member.id

    def iter_subtree(self) -> Iterator["FamilyNode"]:
        """Yield this node and every descendant couple (primaries only)."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def member_ids(self) -> List[str]:
        ids = [self.member.id]
        if self.spouse is not None:
            ids.append(self.spouse.member.id)
        return ids

    def __repr__(self) -> str:
        spouse = self.spouse.member.id if self.spouse is not None else None
        return (
            f"<FamilyNode id={self.member.id!r} spouse={spouse!r} "
            f"children={len(self.children)}>"
        )
