import pytest

from dispatch.errors import AddressNotFound
from dispatch.models import IncidentTarget, TravelMetric
from dispatch.state_machines.session_state import (
    SessionPhase,
    SessionStateException,
    SettledOutcome,
    begin_place_search,
    begin_search,
    edit_address,
    fail,
    initial_state,
    metrics_fetched,
    reset,
    settle,
    target_resolved,
)
from members.models import Member
from routing.matrix_adapter import TravelLeg

HOME = (41.340992, -74.168008)
TARGET = IncidentTarget(coordinate=(41.35, -74.17), raw_address_text="12 Garfield Rd")


def responder():
    member = Member.new("m1", "Jane", "Doe", "101", lat=41.34, lng=-74.16)
    leg = TravelLeg("1.0 mi", "3 mins", 180.0)
    return TravelMetric(member=member, driving=leg, walking=leg)


@pytest.fixture
def resolving():
    return begin_search(initial_state(HOME, 15), "12 Garfield Rd", 15)


def test_full_successful_walk(resolving):
    generation = resolving.generation
    state = target_resolved(resolving, generation, TARGET)
    assert state.phase == SessionPhase.FETCHING
    assert state.view_center == TARGET.coordinate

    state = metrics_fetched(state, generation)
    assert state.phase == SessionPhase.RANKING

    state = settle(state, generation, [responder()])
    assert state.phase == SessionPhase.SETTLED
    assert state.outcome == SettledOutcome.SUCCESS
    assert state.result.target == TARGET
    assert len(state.result) == 1
    assert state.in_flight is False


def test_no_responders_settles_empty_not_error(resolving):
    generation = resolving.generation
    state = metrics_fetched(target_resolved(resolving, generation, TARGET), generation)

    state = settle(state, generation, [])

    assert state.outcome == SettledOutcome.EMPTY
    assert state.error is None
    assert state.result is None
    assert state.target == TARGET


def test_failure_clears_target_and_result(resolving):
    state = fail(resolving, resolving.generation, AddressNotFound("Address not found: zzz"))

    assert state.outcome == SettledOutcome.ERROR
    assert isinstance(state.error, AddressNotFound)
    assert state.target is None
    assert state.result is None


def test_new_search_supersedes_older_generation(resolving):
    old_generation = resolving.generation
    newer = begin_search(resolving, "1 Main St", 20)

    assert newer.generation == old_generation + 1
    # results for the old search are dropped silently
    assert target_resolved(newer, old_generation, TARGET) is newer
    assert fail(newer, old_generation, AddressNotFound("x")) is newer


def test_place_search_skips_resolving():
    state = begin_place_search(initial_state(HOME, 15), TARGET, 30)

    assert state.phase == SessionPhase.FETCHING
    assert state.target == TARGET
    assert state.max_driving_minutes == 30
    assert state.address_text == TARGET.raw_address_text


def test_edit_invalidates_target_and_in_flight_work():
    state = begin_place_search(initial_state(HOME, 15), TARGET, 15)
    generation = state.generation

    edited = edit_address(state, "12 Garfield R")

    assert edited.phase == SessionPhase.IDLE
    assert edited.target is None
    assert edited.address_text == "12 Garfield R"
    assert metrics_fetched(edited, generation) is edited


def test_reset_recentres_and_clears():
    state = begin_place_search(initial_state(HOME, 15), TARGET, 15)
    state = settle(metrics_fetched(state, state.generation), state.generation, [responder()])

    state = reset(state, HOME)

    assert state.phase == SessionPhase.IDLE
    assert state.view_center == HOME
    assert state.target is None and state.result is None and state.outcome is None
    assert state.address_text == ""


def test_out_of_order_transition_raises(resolving):
    with pytest.raises(SessionStateException):
        metrics_fetched(resolving, resolving.generation)

    with pytest.raises(SessionStateException):
        settle(resolving, resolving.generation, [])

    idle = initial_state(HOME, 15)
    with pytest.raises(SessionStateException):
        fail(idle, idle.generation, AddressNotFound("x"))
