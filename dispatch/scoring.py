#Purpose: Ranking & budget filter (the "who is closest" layer).
#Takes travel metrics for every candidate and produces the final, ordered
#responder list:
#drop anyone whose drive exceeds the budget (unroutable drives always drop)
#order by driving seconds, ties keep candidate order (stable sort)
#keep the top K
#Pure function, no I/O.

from typing import List, Sequence

from .models import TravelMetric

DEFAULT_TOP_K = 5


def rank_and_bound(
    metrics: Sequence[TravelMetric],
    max_driving_minutes: int,
    top_k: int = DEFAULT_TOP_K,
) -> List[TravelMetric]:
    """
    Returns at most `top_k` metrics with driving time <= max_driving_minutes, fastest first.
    """
    if top_k < 1:
        raise ValueError("top_k must be >= 1")
    if max_driving_minutes < 0:
        raise ValueError("max_driving_minutes cannot be negative")

    budget_s = max_driving_minutes * 60

    # inf (UNAVAILABLE) never passes a finite budget
    within_budget = [metric for metric in metrics if metric.driving_seconds <= budget_s]

    ranked = sorted(within_budget, key=lambda metric: metric.driving_seconds)
    return ranked[:top_k]
