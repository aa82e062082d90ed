"""
Purpose: Data models for one dispatch search.
What it does:
Defines the incident target, the transient candidate records and the travel
metrics that flow through pre-filter -> fetch -> rank.

Rule: No HTTP calls, no ranking logic. Models only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from members.models import Member
from routing.matrix_adapter import UNAVAILABLE, LegOutcome

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class IncidentTarget:
    """
    The resolved location of the address needing a response.
    Lives only as long as the search that created it.
    """
    coordinate: LatLng
    raw_address_text: str


@dataclass(frozen=True)
class CandidateWithLinearDistance:
    member: Member
    straight_line_meters: float


@dataclass(frozen=True)
class TravelMetric:
    """
    Driving and walking outcome for one candidate.
    Either leg may be UNAVAILABLE when the routing service could not compute it.
    """
    member: Member
    driving: LegOutcome
    walking: LegOutcome

    @property
    def driving_seconds(self) -> float:
        """Unavailable driving ranks worse than any computable duration."""
        if self.driving is UNAVAILABLE:
            return math.inf
        return self.driving.duration_seconds

    @property
    def has_driving(self) -> bool:
        return self.driving is not UNAVAILABLE

    @property
    def has_walking(self) -> bool:
        return self.walking is not UNAVAILABLE


@dataclass(frozen=True)
class DispatchResult:
    """
    Output of one successful search: the closest responders (best first)
    together with the target they were computed against.
    """
    target: IncidentTarget
    responders: Tuple[TravelMetric, ...]

    def __len__(self) -> int:
        return len(self.responders)
