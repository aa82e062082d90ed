"""
Purpose: Central configuration for closest-responder dispatch.
What it does:

Stores all tunable thresholds/caps for a dispatch search:

CANDIDATE_LIMIT = 20
TOP_K = 5
DEFAULT_MAX_DRIVING_MINUTES = 15   (operator can pick 5..60 in steps of 5)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from dotenv import load_dotenv

from routing.geocoder import RegionBias
from routing.units import UnitSystem

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Central configuration for responder search.
    """

    # --- Straight-line pre-filter ---
    # How many members (closest as the crow flies) are sent to the routing service.
    # 4x top_k so that travel-time re-ordering rarely pushes a true top responder
    # outside the window. This is an approximation, not a guarantee.
    candidate_limit: int = 20

    # --- Final ranking ---
    top_k: int = 5

    # --- Travel-time budget (minutes) ---
    default_max_driving_minutes: int = 15
    min_driving_minutes: int = 5
    max_driving_minutes: int = 60
    driving_minutes_step: int = 5

    # --- Display units for distance text ---
    units: UnitSystem = UnitSystem.IMPERIAL

    # --- Metrics fetch ---
    # Bounded wait on the paired driving/walking lookups. None waits indefinitely.
    fetch_timeout_s: Optional[float] = None

    # --- Geocoding ---
    country: str = "US"
    region_bias: Optional[RegionBias] = field(
        default_factory=lambda: RegionBias(south_west=(41.20, -74.35), north_east=(41.50, -73.95))
    )

    # --- Map view ---
    # Where the map re-centres after a reset.
    default_center: LatLng = (41.340992, -74.168008)

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.top_k < 1:
            raise ValueError("top_k must be >= 1")

        if self.candidate_limit < self.top_k:
            raise ValueError("candidate_limit must be >= top_k")

        if self.driving_minutes_step <= 0:
            raise ValueError("driving_minutes_step must be > 0")

        if not 0 < self.min_driving_minutes <= self.max_driving_minutes:
            raise ValueError("need 0 < min_driving_minutes <= max_driving_minutes")

        self.check_driving_budget(self.default_max_driving_minutes)

        if self.fetch_timeout_s is not None and self.fetch_timeout_s <= 0:
            raise ValueError("fetch_timeout_s must be > 0 when set")

        if len(self.country) != 2:
            raise ValueError("country must be a two-letter ISO code")

    def check_driving_budget(self, minutes: int) -> int:
        """
        Returns the budget if the operator could have picked it, raises otherwise.
        """
        if not self.min_driving_minutes <= minutes <= self.max_driving_minutes:
            raise ValueError(
                f"max driving minutes must be between {self.min_driving_minutes} and {self.max_driving_minutes}"
            )
        if (minutes - self.min_driving_minutes) % self.driving_minutes_step:
            raise ValueError(f"max driving minutes must be a multiple of {self.driving_minutes_step}")
        return minutes


def default_dispatch_policy() -> DispatchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DispatchPolicy()
    p.validate()
    return p


def policy_from_env() -> DispatchPolicy:
    """
    Default policy with overrides from the environment / .env file:

    DISPATCH_CANDIDATE_LIMIT, DISPATCH_TOP_K, DISPATCH_MAX_DRIVING_MINUTES,
    DISPATCH_UNITS (imperial|metric), DISPATCH_FETCH_TIMEOUT_S, DISPATCH_COUNTRY
    """
    load_dotenv()
    p = DispatchPolicy()
    overrides = {}

    if os.getenv("DISPATCH_CANDIDATE_LIMIT"):
        overrides["candidate_limit"] = int(os.environ["DISPATCH_CANDIDATE_LIMIT"])
    if os.getenv("DISPATCH_TOP_K"):
        overrides["top_k"] = int(os.environ["DISPATCH_TOP_K"])
    if os.getenv("DISPATCH_MAX_DRIVING_MINUTES"):
        overrides["default_max_driving_minutes"] = int(os.environ["DISPATCH_MAX_DRIVING_MINUTES"])
    if os.getenv("DISPATCH_UNITS"):
        overrides["units"] = UnitSystem(os.environ["DISPATCH_UNITS"].lower())
    if os.getenv("DISPATCH_FETCH_TIMEOUT_S"):
        overrides["fetch_timeout_s"] = float(os.environ["DISPATCH_FETCH_TIMEOUT_S"])
    if os.getenv("DISPATCH_COUNTRY"):
        overrides["country"] = os.environ["DISPATCH_COUNTRY"].upper()

    if overrides:
        p = replace(p, **overrides)
    p.validate()
    return p
