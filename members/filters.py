"""
Purpose: Directory filters (the "who is in view" layer).
What it does:
Narrows the member directory by free-text search, role, status and
qualifications. The filtered list is what the operator sees on the map and
is the only population a dispatch search is allowed to consider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Sequence

from .models import ActivityStatus, Member, MemberRole


@dataclass(frozen=True)
class MemberFilter:
    """
    Empty fields do not filter anything.
    """
    search_term: str = ""
    roles: FrozenSet[MemberRole] = field(default_factory=frozenset)
    statuses: FrozenSet[ActivityStatus] = field(default_factory=frozenset)
    # member must hold every listed qualification
    qualifications: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not (self.search_term.strip() or self.roles or self.statuses or self.qualifications)


def matches_search(member: Member, search_term: str) -> bool:
    """
    Case-insensitive match on first or last name; substring match on the FD ID number.
    """
    term = search_term.strip().lower()
    if not term:
        return True

    return (
        term in member.first_name.lower()
        or term in member.last_name.lower()
        or term in member.fd_id_number.lower()
    )


def filter_members(members: Sequence[Member], member_filter: MemberFilter) -> List[Member]:
    """
    Returns only members matching every active criterion, in input order.
    """
    if member_filter.is_empty:
        return list(members)

    wanted_qualifications = {q.lower() for q in member_filter.qualifications}
    visible = []

    for member in members:
        if not matches_search(member, member_filter.search_term):
            continue

        if member_filter.roles and member.role not in member_filter.roles:
            continue

        if member_filter.statuses and member.status not in member_filter.statuses:
            continue

        if wanted_qualifications:
            held = {q.lower() for q in member.qualifications}
            if not wanted_qualifications.issubset(held):
                continue

        visible.append(member)

    return visible
