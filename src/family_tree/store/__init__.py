from family_tree.store.member_store import MemberStore, read_member_records

__all__ = ["MemberStore", "read_member_records"]
