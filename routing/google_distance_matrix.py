#Purpose: Google Distance Matrix adapter.
#Same contract as OSRMMatrixProvider: many origins, one destination, one mode.
#Per-element failures (NOT_FOUND, ZERO_RESULTS, ...) become UNAVAILABLE;
#a failed top-level status fails the whole call.

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .google_client import GoogleMapsClient, GoogleMapsError
from .matrix_adapter import UNAVAILABLE, LegOutcome, MatrixServiceError, TravelLeg
from .units import TravelMode, UnitSystem

LatLng = Tuple[float, float]

# Google rejects more than 25 origins per request
MAX_ORIGINS_PER_REQUEST = 25


def _format_latlng(coord: LatLng) -> str:
    return f"{coord[0]},{coord[1]}"


class GoogleDistanceMatrixProvider:
    def __init__(self, client: Optional[GoogleMapsClient] = None, batch_size: int = MAX_ORIGINS_PER_REQUEST):
        if not 1 <= batch_size <= MAX_ORIGINS_PER_REQUEST:
            raise ValueError(f"batch_size must be between 1 and {MAX_ORIGINS_PER_REQUEST}")
        self.client = client or GoogleMapsClient()
        self.batch_size = batch_size

    def travel_matrix(
        self,
        origins: Sequence[LatLng],
        destination: LatLng,
        mode: TravelMode,
        units: UnitSystem = UnitSystem.IMPERIAL,
    ) -> List[LegOutcome]:
        outcomes: List[LegOutcome] = []

        #Process origins in batches to stay under the per-request origin limit
        for start in range(0, len(origins), self.batch_size):
            batch = origins[start: start + self.batch_size]
            outcomes.extend(self._fetch_batch(batch, destination, mode, units))

        return outcomes

    def _fetch_batch(
        self,
        origins: Sequence[LatLng],
        destination: LatLng,
        mode: TravelMode,
        units: UnitSystem,
    ) -> List[LegOutcome]:
        params = {
            "origins": "|".join(_format_latlng(origin) for origin in origins),
            "destinations": _format_latlng(destination),
            "mode": mode.value,
            "units": units.value,
        }

        try:
            data = self.client.get_json("distancematrix", params)
        except GoogleMapsError as exc:
            raise MatrixServiceError(str(exc)) from exc

        status = data.get("status")
        if status != "OK":
            raise MatrixServiceError(
                f"Distance Matrix failed: {status} {data.get('error_message', '')}".strip()
            )

        rows = data.get("rows") or []
        if len(rows) != len(origins):
            raise MatrixServiceError(
                f"Distance Matrix returned {len(rows)} rows for {len(origins)} origins"
            )

        outcomes: List[LegOutcome] = []
        for row in rows:
            elements = row.get("elements") or []
            element = elements[0] if elements else {}

            if element.get("status") != "OK":
                outcomes.append(UNAVAILABLE)
                continue

            try:
                leg = TravelLeg(
                    distance_text=element["distance"]["text"],
                    duration_text=element["duration"]["text"],
                    duration_seconds=float(element["duration"]["value"]),
                    distance_meters=float(element["distance"]["value"]),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise MatrixServiceError(f"Malformed Distance Matrix element: {exc}") from exc
            outcomes.append(leg)

        missing = sum(1 for outcome in outcomes if outcome is UNAVAILABLE)
        if missing:
            logger.warning(f"Distance Matrix had no {mode.value} route for {missing}/{len(origins)} origins")
        return outcomes
