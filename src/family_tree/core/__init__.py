from family_tree.core.exceptions import (
    FamilyTreeError,
    MemberNotFoundError,
    StoreError,
    ValidationError,
)

__all__ = [
    "FamilyTreeError",
    "MemberNotFoundError",
    "StoreError",
    "ValidationError",
]
