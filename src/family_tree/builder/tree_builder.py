# src/family_tree/builder/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Union

from family_tree.logging import get_logger
from family_tree.models import FamilyNode, Member, coerce_members

log = get_logger(__name__)

MemberLike = Union[Member, Mapping]


@dataclass
class _BuildState:
    """
    Working sets for one build call.

    Attributes:
        placed:
            Ids already emitted as a primary or as an attached spouse. A member
            is expanded at most once per build, which also stops recursion on
            parent cycles.
        deferred:
            Parentless ids that must not be processed at the root level
            because their spouse has a parent; they surface beside that spouse.
    """

    placed: Set[str] = field(default_factory=set)
    deferred: Set[str] = field(default_factory=set)


class TreeBuilder:
    """
    Turn a flat member collection into a forest of couple nodes.

    The input is indexed once at construction; each ``build`` call runs with
    its own ``_BuildState`` and returns a freshly allocated forest. The input
    members are never mutated.
    """

    def __init__(self, members: Iterable[MemberLike]):
        self._members: List[Member] = []
        self._by_id: Dict[str, Member] = {}

        for member in coerce_members(members):
            if member.id in self._by_id:
                log.warning("Duplicate member id %s ignored", member.id)
                continue
            self._by_id[member.id] = member
            self._members.append(member)

        self._parent_of: Dict[str, Optional[str]] = {
            m.id: self._resolve_parent(m) for m in self._members
        }
        self._partner_of: Dict[str, str] = self._pair_spouses()

        # Sibling groups in collection order; sorted() is stable so ties on
        # child_order keep that order.
        groups: Dict[Optional[str], List[Member]] = {}
        for m in self._members:
            groups.setdefault(self._parent_of[m.id], []).append(m)
        self._children_of: Dict[Optional[str], List[Member]] = {
            pid: sorted(group, key=lambda m: m.sort_order)
            for pid, group in groups.items()
        }

    # ------------------------------------------------------------------ #
    # Index construction
    # ------------------------------------------------------------------ #

    def _resolve_parent(self, member: Member) -> Optional[str]:
        pid = member.parent_id
        if not pid:
            return None
        if pid == member.id:
            log.warning("Member %s lists itself as parent; treated as root", member.id)
            return None
        if pid not in self._by_id:
            log.debug("Member %s has dangling parent_id %s", member.id, pid)
            return None
        return pid

    def _pair_spouses(self) -> Dict[str, str]:
        """
        Normalize ``spouse_id`` claims into a symmetric pairing.

        Mutual claims are paired first, then one-sided claims in collection
        order. A claim on someone who is already paired is dropped.
        """
        claims: Dict[str, str] = {}
        for m in self._members:
            sid = m.spouse_id
            if not sid:
                continue
            if sid == m.id:
                log.warning("Member %s lists itself as spouse; ignored", m.id)
                continue
            if sid not in self._by_id:
                log.debug("Member %s has dangling spouse_id %s", m.id, sid)
                continue
            claims[m.id] = sid

        partners: Dict[str, str] = {}
        for mid, sid in claims.items():
            if claims.get(sid) == mid and mid not in partners:
                partners[mid] = sid
                partners[sid] = mid

        for mid, sid in claims.items():
            if partners.get(mid) == sid:
                continue
            if mid in partners or sid in partners:
                log.warning(
                    "Spouse claim %s -> %s conflicts with an existing pairing; ignored",
                    mid,
                    sid,
                )
                continue
            partners[mid] = sid
            partners[sid] = mid

        return partners

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def get_member(self, member_id: str) -> Optional[Member]:
        return self._by_id.get(member_id)

    def partner_of(self, member_id: str) -> Optional[Member]:
        pid = self._partner_of.get(member_id)
        return self._by_id.get(pid) if pid else None

    def has_parent(self, member_id: str) -> bool:
        return self._parent_of.get(member_id) is not None

    def is_anchored(self, member_id: str) -> bool:
        """True for a parentless member whose spouse has a parent."""
        partner = self._partner_of.get(member_id)
        return (
            partner is not None
            and not self.has_parent(member_id)
            and self.has_parent(partner)
        )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def build_children_of(
        self,
        parent_id: Optional[str],
        state: Optional[_BuildState] = None,
    ) -> List[FamilyNode]:
        """
        Build the couple nodes for every member recorded under ``parent_id``.

        ``None`` selects members without a (resolvable) parent. Without an
        explicit ``state`` the call starts a fresh build.
        """
        if state is None:
            state = self._new_state()

        siblings = self._children_of.get(parent_id, [])
        if not siblings:
            return []

        # Siblings married to each other render once, under the earlier one.
        position = {m.id: i for i, m in enumerate(siblings)}
        suppressed: Set[str] = set()
        for i, m in enumerate(siblings):
            partner = self._partner_of.get(m.id)
            if partner in position:
                suppressed.add(m.id if position[partner] < i else partner)

        nodes: List[FamilyNode] = []
        for m in siblings:
            if m.id in state.placed or m.id in suppressed or m.id in state.deferred:
                continue
            nodes.append(self._build_couple(m, state))
        return nodes

    def _build_couple(self, member: Member, state: _BuildState) -> FamilyNode:
        state.placed.add(member.id)

        partner = self.partner_of(member.id)
        if partner is not None and partner.id in state.placed:
            log.warning(
                "Spouse %s of %s already placed elsewhere; not attached",
                partner.id,
                member.id,
            )
            partner = None
        if partner is not None:
            state.placed.add(partner.id)

        children = self.build_children_of(member.id, state)
        if partner is not None:
            children = children + self.build_children_of(partner.id, state)

        excluded = {member.id}
        if partner is not None:
            excluded.add(partner.id)
        seen: Set[str] = set()
        merged: List[FamilyNode] = []
        for child in children:
            if child.id in seen or child.id in excluded:
                continue
            seen.add(child.id)
            merged.append(child)
        merged.sort(key=lambda n: n.member.sort_order)

        # Two-phase construction: bare spouse, primary, then the back-link.
        spouse_node = None
        if partner is not None:
            spouse_node = FamilyNode(member=partner, is_spouse=True)
        node = FamilyNode(member=member, spouse=spouse_node, children=merged)
        if spouse_node is not None:
            spouse_node.spouse = node
        return node

    def _cycle_entry(self, member_id: str, state: _BuildState) -> str:
        """Walk up unplaced parents until an id repeats or the chain ends."""
        seen: Set[str] = set()
        current = member_id
        while current not in seen:
            seen.add(current)
            parent = self._parent_of.get(current)
            if parent is None or parent in state.placed:
                break
            current = parent
        return current

    def select_roots(self, built: List[FamilyNode]) -> List[FamilyNode]:
        """
        Filter the parentless couples down to the displayed roots.

        Drops nodes whose member is attached as a spouse anywhere in ``built``
        and parentless nodes whose spouse has a parent.
        """
        spouse_ids = collect_spouse_ids(built)
        roots: List[FamilyNode] = []
        for node in built:
            if node.id in spouse_ids:
                continue
            if self.is_anchored(node.id):
                continue
            roots.append(node)
        return roots

    def _new_state(self) -> _BuildState:
        return _BuildState(
            deferred={m.id for m in self._members if self.is_anchored(m.id)}
        )

    def build(self) -> List[FamilyNode]:
        """Build the displayed forest for the whole collection."""
        state = self._new_state()
        roots = self.select_roots(self.build_children_of(None, state))

        # Whatever is left hangs off a parent cycle; break each cycle at the
        # member where the upward walk repeats and show it as an extra root.
        for m in self._members:
            if m.id in state.placed or self.is_anchored(m.id):
                continue
            entry = self._cycle_entry(m.id, state)
            if entry in state.placed:
                continue
            log.warning("Parent cycle through %s; shown as an extra root", entry)
            roots.append(self._build_couple(self._by_id[entry], state))

        log.debug(
            "Built forest: members=%d roots=%d placed=%d",
            len(self._members),
            len(roots),
            len(state.placed),
        )
        return roots


# ---------------------------------------------------------------------- #
# Forest helpers
# ---------------------------------------------------------------------- #

def build_forest(members: Iterable[MemberLike]) -> List[FamilyNode]:
    """
    Build the displayed forest from a flat member collection.

        members -> [FamilyNode(root couple), ...]
    """
    return TreeBuilder(members).build()


def iter_nodes(forest: Iterable[FamilyNode]) -> Iterator[FamilyNode]:
    """Depth-first iteration over every primary node in the forest."""
    for root in forest:
        yield from root.iter_subtree()


def collect_spouse_ids(forest: Iterable[FamilyNode]) -> Set[str]:
    return {n.spouse.id for n in iter_nodes(forest) if n.spouse is not None}


def collect_member_ids(forest: Iterable[FamilyNode]) -> List[str]:
    """Every member id in the forest, primaries and spouses, in walk order."""
    ids: List[str] = []
    for node in iter_nodes(forest):
        ids.extend(node.member_ids())
    return ids


def forest_depth(forest: Iterable[FamilyNode]) -> int:
    """Number of generations in the deepest branch (0 for an empty forest)."""
    def depth(node: FamilyNode) -> int:
        return 1 + max((depth(c) for c in node.children), default=0)

    return max((depth(root) for root in forest), default=0)


def find_node(forest: Iterable[FamilyNode], member_id: str) -> Optional[FamilyNode]:
    """
    Return the couple node for ``member_id``, or None.

    A match on the spouse slot returns the primary node of that couple.
    """
    for node in forest:
        if node.id == member_id:
            return node
        if node.spouse is not None and node.spouse.id == member_id:
            return node
        found = find_node(node.children, member_id)
        if found is not None:
            return found
    return None
