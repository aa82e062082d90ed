"""
Purpose: Lifecycle of one operator's dispatch search.

IDLE -> RESOLVING (geocoding) -> FETCHING (travel metrics) -> RANKING -> SETTLED(success|empty|error)

Every function here is pure: it takes a SessionState and returns a new one.
Transitions that report a result carry the generation they were started
with; if a newer search (or an edit/reset) has bumped the generation since,
the transition is a no-op and the old result is silently dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..errors import DispatchError
from ..models import DispatchResult, IncidentTarget, TravelMetric

LatLng = Tuple[float, float]


class SessionStateException(Exception):
    """Raised when a transition is attempted from the wrong phase."""
    pass


class SessionPhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    RANKING = "ranking"
    SETTLED = "settled"


class SettledOutcome(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    phase: SessionPhase
    generation: int
    max_driving_minutes: int
    view_center: LatLng

    address_text: str = ""
    target: Optional[IncidentTarget] = None
    result: Optional[DispatchResult] = None
    outcome: Optional[SettledOutcome] = None
    error: Optional[DispatchError] = None

    @property
    def in_flight(self) -> bool:
        return self.phase in (SessionPhase.RESOLVING, SessionPhase.FETCHING, SessionPhase.RANKING)

    def is_current(self, generation: int) -> bool:
        return generation == self.generation


def initial_state(view_center: LatLng, max_driving_minutes: int) -> SessionState:
    return SessionState(
        phase=SessionPhase.IDLE,
        generation=0,
        max_driving_minutes=max_driving_minutes,
        view_center=view_center,
    )


def _expect(state: SessionState, *phases: SessionPhase) -> None:
    if state.phase not in phases:
        allowed = ", ".join(phase.value for phase in phases)
        raise SessionStateException(f"Expected phase {allowed}, session is {state.phase.value}")


def begin_search(state: SessionState, address_text: str, max_driving_minutes: int) -> SessionState:
    """
    Operator submitted a free-text address. Any earlier search is superseded
    and the previous target/result are dropped straight away.
    """
    return replace(
        state,
        phase=SessionPhase.RESOLVING,
        generation=state.generation + 1,
        max_driving_minutes=max_driving_minutes,
        address_text=address_text,
        target=None,
        result=None,
        outcome=None,
        error=None,
    )


def begin_place_search(state: SessionState, target: IncidentTarget, max_driving_minutes: int) -> SessionState:
    """
    Operator picked an autocomplete suggestion that already has a coordinate,
    so geocoding is skipped and the search goes straight to FETCHING.
    """
    return replace(
        state,
        phase=SessionPhase.FETCHING,
        generation=state.generation + 1,
        max_driving_minutes=max_driving_minutes,
        address_text=target.raw_address_text,
        target=target,
        view_center=target.coordinate,
        result=None,
        outcome=None,
        error=None,
    )


def target_resolved(state: SessionState, generation: int, target: IncidentTarget) -> SessionState:
    if not state.is_current(generation):
        return state
    _expect(state, SessionPhase.RESOLVING)
    return replace(state, phase=SessionPhase.FETCHING, target=target, view_center=target.coordinate)


def metrics_fetched(state: SessionState, generation: int) -> SessionState:
    if not state.is_current(generation):
        return state
    _expect(state, SessionPhase.FETCHING)
    return replace(state, phase=SessionPhase.RANKING)


def settle(state: SessionState, generation: int, responders: Sequence[TravelMetric]) -> SessionState:
    """
    RANKING -> SETTLED. No responder within budget is EMPTY, which is not an error.
    """
    if not state.is_current(generation):
        return state
    _expect(state, SessionPhase.RANKING)
    if state.target is None:
        raise SessionStateException("Cannot settle a search without a target")

    if not responders:
        return replace(state, phase=SessionPhase.SETTLED, outcome=SettledOutcome.EMPTY, result=None)

    return replace(
        state,
        phase=SessionPhase.SETTLED,
        outcome=SettledOutcome.SUCCESS,
        result=DispatchResult(target=state.target, responders=tuple(responders)),
    )


def fail(state: SessionState, generation: int, error: DispatchError) -> SessionState:
    """
    Any stage failure. Target and result are cleared so nothing on screen
    disagrees with the address the operator is looking at.
    """
    if not state.is_current(generation):
        return state
    _expect(state, SessionPhase.RESOLVING, SessionPhase.FETCHING, SessionPhase.RANKING)
    return replace(
        state,
        phase=SessionPhase.SETTLED,
        outcome=SettledOutcome.ERROR,
        error=error,
        target=None,
        result=None,
    )


def edit_address(state: SessionState, address_text: str) -> SessionState:
    """
    Manual edit of the address box: the old target no longer matches what
    is typed, so it and its result go immediately. In-flight work is invalidated.
    """
    return replace(
        state,
        phase=SessionPhase.IDLE,
        generation=state.generation + 1,
        address_text=address_text,
        target=None,
        result=None,
        outcome=None,
        error=None,
    )


def reset(state: SessionState, default_center: LatLng) -> SessionState:
    """
    Explicit reset: clear everything and re-centre the map. Not a new search.
    """
    return replace(
        state,
        phase=SessionPhase.IDLE,
        generation=state.generation + 1,
        view_center=default_center,
        address_text="",
        target=None,
        result=None,
        outcome=None,
        error=None,
    )
