"""
Purpose: Core data models for the member directory.
What it does:
Defines the structure of a Member, their role and activity status, without
relying on any ORM. Dispatch only ever reads these records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

LatLng = Tuple[float, float]


class MemberRole(str, Enum):
    """
    Department rank of a member.
    """
    CHIEF = "CHIEF"
    ASSISTANT_CHIEF = "ASSISTANT_CHIEF"
    DEPUTY_CHIEF = "DEPUTY_CHIEF"
    FULL_MEMBER = "FULL_MEMBER"
    PROBATIONARY = "PROBATIONARY"
    LIFE = "LIFE"
    DUTY_CREW = "DUTY_CREW"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class ActivityStatus(str, Enum):
    LOW = "LOW"
    REGULAR = "REGULAR"


@dataclass(frozen=True)
class Member:
    """
    A read-only snapshot of a member as the directory knows them.
    `location` is None until the member's address has been geocoded.
    """
    id: str
    first_name: str
    last_name: str
    fd_id_number: str
    role: MemberRole
    qualifications: FrozenSet[str] = field(default_factory=frozenset)
    location: Optional[LatLng] = None

    status: ActivityStatus = ActivityStatus.REGULAR
    cell_phone: str = ""
    address: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_location(self) -> bool:
        """True when the member can be placed on the map (and ranked)."""
        if self.location is None:
            return False
        lat, lng = self.location
        return math.isfinite(lat) and math.isfinite(lng)

    @classmethod
    def new(
        cls,
        member_id: str,
        first_name: str,
        last_name: str,
        fd_id_number: str,
        role: str | MemberRole = MemberRole.FULL_MEMBER,
        qualifications: Iterable[str] = (),
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        status: str | ActivityStatus = ActivityStatus.REGULAR,
        cell_phone: str = "",
        address: str = "",
    ) -> Member:
        if isinstance(role, str):
            role = MemberRole(role)
        if isinstance(status, str):
            status = ActivityStatus(status)

        location = None
        if lat is not None and lng is not None:
            location = (float(lat), float(lng))

        return cls(
            id=member_id,
            first_name=first_name,
            last_name=last_name,
            fd_id_number=fd_id_number,
            role=role,
            qualifications=frozenset(q.strip() for q in qualifications if q and q.strip()),
            location=location,
            status=status,
            cell_phone=cell_phone,
            address=address,
        )
