from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from family_tree.core.exceptions import MemberNotFoundError, StoreError, ValidationError
from family_tree.logging import get_logger
from family_tree.models import Member

log = get_logger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name")
IMMUTABLE_FIELDS = ("id", "created_at")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_member_records(path: Path) -> List[Member]:
    """
    Read every record of a member file, duplicates included.

    Accepts a bare JSON list or ``{"members": [...]}``.
    """
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise StoreError(f"Cannot read members from {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("members", [])
    if not isinstance(data, list):
        raise StoreError(f"Expected a list of members in {path}")

    return [Member.from_dict(record) for record in data]


class MemberStore:
    """
    Member records kept in memory and persisted as a JSON list.

    Spouse links are kept reciprocal on every write:
      - pairing A with B clears the link of B's previous partner and points
        B back at A;
      - changing or removing A's spouse clears the old spouse's link;
      - deleting A clears every ``spouse_id`` that pointed at A.

    Children of a deleted member keep their ``parent_id``; the tree builder
    treats the dangling reference as "no parent".
    """

    def __init__(self, path: Optional[Path] = None, members: Iterable[Member] = ()):
        self.path = Path(path) if path is not None else None
        self._members: Dict[str, Member] = {}
        for m in members:
            self._members[m.id] = m

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #

    @classmethod
    def open(cls, path: Path) -> "MemberStore":
        store = cls(path)
        if store.path.exists():
            store.load()
        return store

    def load(self) -> None:
        if self.path is None:
            raise StoreError("No file configured for this store")

        self._members = {}
        for member in read_member_records(self.path):
            if member.id in self._members:
                log.warning("Duplicate member id %s in %s ignored", member.id, self.path)
                continue
            self._members[member.id] = member
        log.info("Loaded %d member(s) from %s", len(self._members), self.path)

    def save(self) -> None:
        if self.path is None:
            raise StoreError("No file configured for this store")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [m.to_dict() for m in self._members.values()]
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        log.info("Saved %d member(s) to %s", len(payload), self.path)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member_id: str) -> bool:
        return member_id in self._members

    def list_members(self) -> List[Member]:
        """All members in creation order."""
        return list(self._members.values())

    def get(self, member_id: str) -> Member:
        try:
            return self._members[member_id]
        except KeyError:
            raise MemberNotFoundError(member_id) from None

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create(self, data: Mapping[str, Any]) -> Member:
        data = dict(data)
        now = _now()
        data["id"] = str(uuid.uuid4())
        data["created_at"] = now
        data["updated_at"] = now
        if data.get("child_order") in (None, ""):
            data["child_order"] = 0

        member = Member.from_dict(data)
        self._check(member)
        self._members[member.id] = member

        if member.spouse_id:
            self._pair(member.id, member.spouse_id)

        log.info("Created member %s (%s %s)", member.id, member.first_name, member.last_name)
        return member

    def update(self, member_id: str, changes: Mapping[str, Any]) -> Member:
        current = self.get(member_id)
        old_spouse = current.spouse_id

        data = current.to_dict()
        data.update({k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS})
        data["updated_at"] = _now()

        member = Member.from_dict(data)
        self._check(member)
        self._members[member_id] = member

        new_spouse = member.spouse_id
        if old_spouse and old_spouse != new_spouse:
            self._clear_spouse(old_spouse, expected=member_id)
        if new_spouse and new_spouse != old_spouse:
            self._pair(member_id, new_spouse)

        log.info("Updated member %s", member_id)
        return member

    def delete(self, member_id: str) -> None:
        member = self.get(member_id)
        if member.spouse_id:
            self._clear_spouse(member.spouse_id)
        for other in self._members.values():
            if other.spouse_id == member_id:
                other.spouse_id = None
        del self._members[member_id]
        log.info("Deleted member %s", member_id)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _check(self, member: Member) -> None:
        for name in REQUIRED_FIELDS:
            if not (getattr(member, name) or "").strip():
                raise ValidationError(f"{name} is required")
        order = member.child_order
        if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
            raise ValidationError(f"child_order must be an integer, got {member.child_order!r}")
        if member.parent_id == member.id:
            raise ValidationError("A member cannot be their own parent")
        if member.spouse_id == member.id:
            raise ValidationError("A member cannot be their own spouse")
        for ref in ("parent_id", "spouse_id"):
            target = getattr(member, ref)
            if target and target not in self._members:
                raise ValidationError(f"{ref} refers to unknown member {target}")

    def _clear_spouse(self, member_id: str, expected: Optional[str] = None) -> None:
        other = self._members.get(member_id)
        if other is None:
            return
        if expected is not None and other.spouse_id != expected:
            return
        other.spouse_id = None
        other.updated_at = _now()

    def _pair(self, member_id: str, spouse_id: str) -> None:
        spouse = self._members[spouse_id]
        previous = spouse.spouse_id
        if previous and previous != member_id:
            self._clear_spouse(previous, expected=spouse_id)
            log.info("Unpaired %s from %s", previous, spouse_id)
        spouse.spouse_id = member_id
        spouse.updated_at = _now()
