"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Takes an incident address (or an already-resolved place), resolves it, runs
the straight-line pre-filter, fetches driving/walking metrics, ranks within
the travel-time budget and records the outcome as session state.

Failures from the geocoder or routing service never escape: they settle the
session as an error. A search that has been superseded by a newer one (or by
an edit/reset) finishes quietly without touching state.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from loguru import logger

from members.models import Member
from routing.geocoder import AddressNotFoundError, Geocoder, GeocodingError, PlaceSelection
from routing.matrix_adapter import MatrixServiceError, TravelMatrixProvider
from .candidate_filter import select_candidates
from .errors import AddressNotFound, DispatchError, ServiceUnavailable
from .metrics import fetch_metrics
from .models import IncidentTarget
from .policy import DispatchPolicy, default_dispatch_policy
from .scoring import rank_and_bound
from .state_machines import session_state as transitions
from .state_machines.session_state import SessionState


class DispatchSession:
    """
    One operator's closest-responder search. Holds the current SessionState;
    only the latest search may write to it.
    """
    def __init__(
        self,
        geocoder: Geocoder,
        matrix_provider: TravelMatrixProvider,
        policy: Optional[DispatchPolicy] = None,
    ):
        self.geocoder = geocoder
        self.matrix_provider = matrix_provider
        self.policy = policy or default_dispatch_policy()
        self.policy.validate()
        self.state = transitions.initial_state(
            view_center=self.policy.default_center,
            max_driving_minutes=self.policy.default_max_driving_minutes,
        )

    async def search_address(
        self,
        address_text: str,
        members: Iterable[Member],
        max_driving_minutes: Optional[int] = None,
    ) -> SessionState:
        """
        Free-text search: geocode, then run the pipeline.

        `members` is the population currently in view; it is copied here so
        later directory filter changes do not affect this search.
        """
        minutes = self._budget(max_driving_minutes)
        members = tuple(members)

        self.state = transitions.begin_search(self.state, address_text, minutes)
        generation = self.state.generation
        logger.info(f"Dispatch #{generation}: resolving '{address_text}' ({len(members)} members in view, {minutes} min budget)")

        try:
            resolved = await asyncio.to_thread(
                self.geocoder.geocode,
                address_text,
                region_bias=self.policy.region_bias,
                country=self.policy.country,
            )
        except AddressNotFoundError as exc:
            return self._fail(generation, AddressNotFound(f"Address not found: {address_text}"), exc)
        except GeocodingError as exc:
            return self._fail(generation, ServiceUnavailable("Address lookup failed. Please try again."), exc)
        except Exception as exc:
            return self._fail(generation, ServiceUnavailable("Address lookup failed. Please try again."), exc)

        if not self.state.is_current(generation):
            logger.debug(f"Dispatch #{generation} superseded after geocoding")
            return self.state

        target = IncidentTarget(coordinate=resolved.coordinate, raw_address_text=address_text)
        self.state = transitions.target_resolved(self.state, generation, target)
        return await self._run_pipeline(generation, target, members, minutes)

    async def search_place(
        self,
        place: PlaceSelection,
        members: Iterable[Member],
        max_driving_minutes: Optional[int] = None,
    ) -> SessionState:
        """
        Autocomplete pick: the coordinate is already known, geocoding is skipped.
        """
        minutes = self._budget(max_driving_minutes)
        members = tuple(members)

        target = IncidentTarget(coordinate=place.coordinate, raw_address_text=place.label)
        self.state = transitions.begin_place_search(self.state, target, minutes)
        generation = self.state.generation
        logger.info(f"Dispatch #{generation}: place '{place.label}' ({len(members)} members in view, {minutes} min budget)")

        return await self._run_pipeline(generation, target, members, minutes)

    def edit_address(self, address_text: str = "") -> SessionState:
        """The typed address changed: drop the target and result right away."""
        self.state = transitions.edit_address(self.state, address_text)
        return self.state

    def reset(self) -> SessionState:
        self.state = transitions.reset(self.state, self.policy.default_center)
        return self.state

    # ----------------
    # internals
    # ----------------
    def _budget(self, max_driving_minutes: Optional[int]) -> int:
        if max_driving_minutes is None:
            max_driving_minutes = self.state.max_driving_minutes
        return self.policy.check_driving_budget(max_driving_minutes)

    async def _run_pipeline(self, generation, target, members, minutes) -> SessionState:
        # 1. straight-line pre-filter (pure)
        candidates = select_candidates(members, target.coordinate, self.policy.candidate_limit)

        # 2. driving + walking metrics (suspends)
        try:
            metrics = await fetch_metrics(
                candidates,
                target.coordinate,
                self.matrix_provider,
                units=self.policy.units,
                timeout=self.policy.fetch_timeout_s,
            )
        except MatrixServiceError as exc:
            return self._fail(generation, ServiceUnavailable("Could not get travel times. Please try again."), exc)
        except Exception as exc:
            return self._fail(generation, ServiceUnavailable("Could not get travel times. Please try again."), exc)

        if not self.state.is_current(generation):
            logger.debug(f"Dispatch #{generation} superseded after fetching travel metrics")
            return self.state

        # 3. budget filter + top K (pure)
        self.state = transitions.metrics_fetched(self.state, generation)
        responders = rank_and_bound(metrics, minutes, self.policy.top_k)
        self.state = transitions.settle(self.state, generation, responders)

        if responders:
            logger.info(f"Dispatch #{generation}: {len(responders)} responders within {minutes} min of {target.raw_address_text}")
        else:
            logger.info(f"Dispatch #{generation}: no responders within {minutes} min of {target.raw_address_text}")
        return self.state

    def _fail(self, generation: int, error: DispatchError, cause: Exception) -> SessionState:
        if not self.state.is_current(generation):
            logger.debug(f"Dispatch #{generation} superseded; dropping failure: {cause}")
            return self.state

        if isinstance(error, AddressNotFound):
            logger.warning(f"Dispatch #{generation}: {error.message}")
        else:
            logger.error(f"Dispatch #{generation}: {error.message} ({cause})")

        self.state = transitions.fail(self.state, generation, error)
        return self.state
