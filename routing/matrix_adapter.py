from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from loguru import logger

from .osrm_client import OSRMClient, OSRMError
from .units import TravelMode, UnitSystem, format_distance, format_duration

LatLng = Tuple[float, float]


class MatrixServiceError(Exception):
    """The whole distance-matrix call failed (transport, quota, invalid request)."""
    pass


class Unavailable(Enum):
    """
    The routing service could not compute this origin/destination pair.
    A normal outcome, not an error. Deliberately not a number.
    """
    UNAVAILABLE = "unavailable"

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable.UNAVAILABLE


@dataclass(frozen=True)
class TravelLeg:
    """
    One computed origin -> destination leg for a single travel mode.
    """
    distance_text: str
    duration_text: str
    duration_seconds: float
    distance_meters: Optional[float] = None


LegOutcome = Union[TravelLeg, Unavailable]


class TravelMatrixProvider(Protocol):
    """
    N origins, 1 destination, one mode per call.
    Returns one outcome per origin, in origin order.
    Raises MatrixServiceError when the call as a whole fails.
    """
    def travel_matrix(
        self,
        origins: Sequence[LatLng],
        destination: LatLng,
        mode: TravelMode,
        units: UnitSystem,
    ) -> List[LegOutcome]:
        ...


class OSRMMatrixProvider:
    """
    Adapts routing.osrm_client.OSRMClient (one client per OSRM profile)
    into a TravelMatrixProvider. OSRM only gives raw meters/seconds, so
    the display text is formatted locally.
    """
    PROFILES = {
        TravelMode.DRIVING: "driving",
        TravelMode.WALKING: "foot",
    }

    def __init__(self, clients: Optional[Dict[TravelMode, OSRMClient]] = None, timeout: int = 5):
        if clients is None:
            clients = {
                mode: OSRMClient(profile=profile, timeout=timeout)
                for mode, profile in self.PROFILES.items()
            }
        self.clients = clients

    def travel_matrix(
        self,
        origins: Sequence[LatLng],
        destination: LatLng,
        mode: TravelMode,
        units: UnitSystem = UnitSystem.IMPERIAL,
    ) -> List[LegOutcome]:
        if not origins:
            return []

        client = self.clients.get(mode)
        if client is None:
            raise MatrixServiceError(f"No OSRM client configured for {mode.value} mode")

        try:
            table = client.compute_table(sources=list(origins), destinations=[destination])
        except OSRMError as exc:
            raise MatrixServiceError(str(exc)) from exc

        durations = table["durations"]
        distances = table["distances"]

        outcomes: List[LegOutcome] = []
        for index in range(len(origins)):
            # one destination column, so each row holds a single cell
            duration = durations[index][0] if index < len(durations) and durations[index] else None
            distance = distances[index][0] if index < len(distances) and distances[index] else None

            if duration is None or distance is None:
                outcomes.append(UNAVAILABLE)
                continue

            outcomes.append(
                TravelLeg(
                    distance_text=format_distance(distance, units),
                    duration_text=format_duration(duration),
                    duration_seconds=float(duration),
                    distance_meters=float(distance),
                )
            )

        missing = sum(1 for outcome in outcomes if outcome is UNAVAILABLE)
        if missing:
            logger.warning(f"OSRM could not route {missing}/{len(origins)} {mode.value} origins")
        return outcomes
