"""
family_tree: build couple-based family trees from flat member records.

    from family_tree import build_forest, find_node
"""

from family_tree.builder import TreeBuilder, build_forest, find_node
from family_tree.models import FamilyNode, Member

__all__ = [
    "FamilyNode",
    "Member",
    "TreeBuilder",
    "build_forest",
    "find_node",
]

__version__ = "0.1.0"
