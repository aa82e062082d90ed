from .session_state import (
    SessionPhase,
    SessionState,
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

__all__ = [
    "SessionPhase",
    "SessionState",
    "SessionStateException",
    "SettledOutcome",
    "begin_place_search",
    "begin_search",
    "edit_address",
    "fail",
    "initial_state",
    "metrics_fetched",
    "reset",
    "settle",
    "target_resolved",
]
