"""
Tree construction.

    members -> TreeBuilder -> [FamilyNode, ...]
"""

from __future__ import annotations

from .tree_builder import (
    TreeBuilder,
    build_forest,
    collect_member_ids,
    collect_spouse_ids,
    find_node,
    forest_depth,
    iter_nodes,
)

__all__ = [
    "TreeBuilder",
    "build_forest",
    "collect_member_ids",
    "collect_spouse_ids",
    "find_node",
    "forest_depth",
    "iter_nodes",
]
