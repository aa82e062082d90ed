import math
import threading
from typing import Dict, Optional

import pytest
import requests

from members.models import Member, MemberRole
from routing.geocoder import AddressNotFoundError, GeocodeResult, GeocodingServiceError
from routing.geodesy import EARTH_RADIUS_M
from routing.matrix_adapter import UNAVAILABLE, MatrixServiceError, TravelLeg
from routing.units import TravelMode, format_distance, format_duration


# meters per degree of latitude on the sphere used by great_circle_meters
METERS_PER_DEGREE_LAT = math.pi * EARTH_RADIUS_M / 180


def member_north_of(origin, meters, member_id, **kwargs):
    """A member `meters` due north of origin (exact great-circle distance)."""
    lat, lng = origin
    return Member.new(
        member_id=member_id,
        first_name=kwargs.pop("first_name", member_id.title()),
        last_name=kwargs.pop("last_name", "Tester"),
        fd_id_number=kwargs.pop("fd_id_number", member_id),
        lat=lat + meters / METERS_PER_DEGREE_LAT,
        lng=lng,
        **kwargs,
    )


@pytest.fixture
def incident_location():
    # Example: the firehouse
    return (41.340992, -74.168008)


class FakeGeocoder:
    """
    Resolves addresses from a lookup table. Unknown addresses are ZERO_RESULTS.
    """
    def __init__(self, known: Optional[Dict[str, tuple]] = None, fail: bool = False, gates=None):
        self.known = known or {}
        self.fail = fail
        self.gates = gates or {}
        self.calls = []

    def geocode(self, address, *, region_bias=None, country=None):
        self.calls.append((address, region_bias, country))
        gate = self.gates.get(address)
        if gate is not None:
            assert gate.wait(5), "geocode gate never opened"
        if self.fail:
            raise GeocodingServiceError("OVER_QUERY_LIMIT")
        if address not in self.known:
            raise AddressNotFoundError(f"No results found for '{address}'")
        return GeocodeResult(coordinate=self.known[address], formatted_address=address.upper())


class FakeMatrixProvider:
    """
    Per-mode travel seconds keyed by origin coordinate. None means UNAVAILABLE.
    Origins missing from a table fall back to `default_seconds`.
    """
    def __init__(
        self,
        driving=None,
        walking=None,
        default_seconds: Optional[float] = 60.0,
        fail_modes=(),
        gates=None,
        barrier: Optional[threading.Barrier] = None,
    ):
        self.tables = {
            TravelMode.DRIVING: driving or {},
            TravelMode.WALKING: walking or {},
        }
        self.default_seconds = default_seconds
        self.fail_modes = set(fail_modes)
        self.gates = gates or {}  # destination -> threading.Event
        self.barrier = barrier
        self.calls = []
        self._lock = threading.Lock()

    def travel_matrix(self, origins, destination, mode, units):
        with self._lock:
            self.calls.append((tuple(origins), destination, mode, units))

        if self.barrier is not None:
            # both modes must be in flight at the same time to get past here
            self.barrier.wait(timeout=5)

        gate = self.gates.get(destination)
        if gate is not None:
            assert gate.wait(5), "matrix gate never opened"

        if mode in self.fail_modes:
            raise MatrixServiceError("OVER_QUERY_LIMIT")

        outcomes = []
        for origin in origins:
            seconds = self.tables[mode].get(origin, self.default_seconds)
            if seconds is None:
                outcomes.append(UNAVAILABLE)
                continue
            outcomes.append(
                TravelLeg(
                    distance_text=format_distance(seconds * 10, units),
                    duration_text=format_duration(seconds),
                    duration_seconds=float(seconds),
                )
            )
        return outcomes


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


@pytest.fixture
def record_get(monkeypatch):
    """
    Replaces requests.get with a stub returning queued FakeResponses.
    Returns the list of (url, params, timeout) calls.
    """
    calls = []
    queue = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params, timeout))
        response = queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(requests, "get", fake_get)
    return calls, queue


@pytest.fixture
def chiefs_and_crew(incident_location):
    return [
        member_north_of(incident_location, 2000, "far", role=MemberRole.CHIEF),
        member_north_of(incident_location, 100, "near", role=MemberRole.FULL_MEMBER),
        member_north_of(incident_location, 500, "mid", role=MemberRole.PROBATIONARY),
    ]
