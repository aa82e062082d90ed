#Expose the high-level pipeline pieces:
#Straight-line pre-filter
#Travel-metrics fetcher
#Ranking & budget filter
#DispatchSession orchestrator (the "one call" entry point)

from .candidate_filter import select_candidates
from .metrics import fetch_metrics
from .scoring import rank_and_bound
from .models import CandidateWithLinearDistance, DispatchResult, IncidentTarget, TravelMetric
from .errors import AddressNotFound, DispatchError, ServiceUnavailable
from .policy import DispatchPolicy, default_dispatch_policy, policy_from_env
from .dispatcher import DispatchSession #the main object a UI drives

__all__ = [
    "select_candidates",
    "fetch_metrics",
    "rank_and_bound",
    "CandidateWithLinearDistance",
    "DispatchResult",
    "IncidentTarget",
    "TravelMetric",
    "AddressNotFound",
    "DispatchError",
    "ServiceUnavailable",
    "DispatchPolicy",
    "default_dispatch_policy",
    "policy_from_env",
    "DispatchSession",
]
