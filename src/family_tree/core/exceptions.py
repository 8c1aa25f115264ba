class FamilyTreeError(Exception):
    """Base exception for family_tree failures."""


class ValidationError(FamilyTreeError):
    """Raised when member data fails validation."""


class MemberNotFoundError(FamilyTreeError):
    """Raised when a member id does not exist in the store."""

    def __init__(self, member_id: str):
        super().__init__(f"Member not found: {member_id}")
        self.member_id = member_id


class StoreError(FamilyTreeError):
    """Raised when the member file cannot be read or written."""
