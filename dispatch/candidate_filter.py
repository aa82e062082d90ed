#Purpose: Straight-line pre-filter (the cheap first pass).
#Narrows the members currently in view to the ones closest to the incident
#as the crow flies, so only a bounded set is sent to the routing service.
#Output: candidates with their great-circle distance, nearest first.

from typing import List, Sequence, Tuple

from members.models import Member
from routing.geodesy import great_circle_meters
from .models import CandidateWithLinearDistance

LatLng = Tuple[float, float]

DEFAULT_CANDIDATE_LIMIT = 20


def select_candidates(
    members: Sequence[Member],
    target: LatLng,
    limit: int = DEFAULT_CANDIDATE_LIMIT,
) -> List[CandidateWithLinearDistance]:
    """
    Members without a usable location are skipped. The sort is stable, so
    members at the same distance keep their directory order.
    """
    if limit < 1:
        raise ValueError("limit must be >= 1")

    candidates = [
        CandidateWithLinearDistance(
            member=member,
            straight_line_meters=great_circle_meters(member.location, target),
        )
        for member in members
        if member.has_location
    ]

    candidates.sort(key=lambda candidate: candidate.straight_line_meters)
    return candidates[:limit]
