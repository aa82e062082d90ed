"""
Purpose: Travel-metrics fetcher.
What it does:
Asks the routing service for driving AND walking metrics from every candidate
to the incident, as two batched calls that run side by side. Both must finish
before any TravelMetric is produced.

A pair the service cannot route comes back as UNAVAILABLE on that leg only.
A failed call fails the whole fetch (MatrixServiceError); nothing partial is returned.
No retries here.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from routing.matrix_adapter import MatrixServiceError, TravelMatrixProvider
from routing.units import TravelMode, UnitSystem
from .models import CandidateWithLinearDistance, TravelMetric

LatLng = Tuple[float, float]


async def fetch_metrics(
    candidates: Sequence[CandidateWithLinearDistance],
    target: LatLng,
    provider: TravelMatrixProvider,
    *,
    units: UnitSystem = UnitSystem.IMPERIAL,
    timeout: Optional[float] = None,
) -> List[TravelMetric]:
    """
    Returns one TravelMetric per candidate, in candidate order.

    The provider is blocking (requests), so each mode runs in a worker thread
    and the two are joined with asyncio.gather. `timeout` bounds the joined
    wait; expiry is reported as MatrixServiceError.
    """
    if not candidates:
        return []

    origins = [candidate.member.location for candidate in candidates]

    lookups = asyncio.gather(
        asyncio.to_thread(provider.travel_matrix, origins, target, TravelMode.DRIVING, units),
        asyncio.to_thread(provider.travel_matrix, origins, target, TravelMode.WALKING, units),
    )

    try:
        if timeout is None:
            driving, walking = await lookups
        else:
            driving, walking = await asyncio.wait_for(lookups, timeout)
    except asyncio.TimeoutError as exc:
        logger.error(f"Travel metrics for {len(origins)} candidates timed out after {timeout}s")
        raise MatrixServiceError(f"Travel-time lookup timed out after {timeout}s") from exc

    if len(driving) != len(origins) or len(walking) != len(origins):
        raise MatrixServiceError(
            f"Expected {len(origins)} results per mode, got {len(driving)} driving / {len(walking)} walking"
        )

    return [
        TravelMetric(member=candidate.member, driving=driving_leg, walking=walking_leg)
        for candidate, driving_leg, walking_leg in zip(candidates, driving, walking)
    ]
