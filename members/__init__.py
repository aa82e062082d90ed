"""
Member directory package.

Public API:
- Domain models: Member, MemberRole, ActivityStatus
- Directory filters: MemberFilter, filter_members
"""
from .models import ActivityStatus, LatLng, Member, MemberRole
from .filters import MemberFilter, filter_members

__all__ = [
    "ActivityStatus",
    "LatLng",
    "Member",
    "MemberRole",
    "MemberFilter",
    "filter_members",
]
