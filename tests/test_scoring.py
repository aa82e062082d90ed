import pytest

from dispatch.models import TravelMetric
from dispatch.scoring import rank_and_bound
from members.models import Member
from routing.matrix_adapter import UNAVAILABLE, TravelLeg


def make_metric(member_id, driving_seconds, walking_seconds=600.0):
    member = Member.new(member_id, member_id.title(), "Tester", member_id, lat=41.0, lng=-74.0)
    driving = UNAVAILABLE if driving_seconds is None else TravelLeg("1.0 mi", "x mins", float(driving_seconds))
    walking = UNAVAILABLE if walking_seconds is None else TravelLeg("0.5 mi", "y mins", float(walking_seconds))
    return TravelMetric(member=member, driving=driving, walking=walking)


def ids(metrics):
    return [m.member.id for m in metrics]


def test_drops_everyone_over_budget():
    metrics = [make_metric("a", 120), make_metric("b", 901), make_metric("c", 900), make_metric("d", 3600)]

    ranked = rank_and_bound(metrics, max_driving_minutes=15, top_k=5)

    assert ids(ranked) == ["a", "c"]
    assert all(m.driving_seconds <= 15 * 60 for m in ranked)


def test_unavailable_driving_never_ranks_even_with_walking():
    metrics = [make_metric("unroutable", None, walking_seconds=30), make_metric("slow", 800)]

    ranked = rank_and_bound(metrics, max_driving_minutes=60, top_k=5)

    assert ids(ranked) == ["slow"]
    assert all(m.driving is not UNAVAILABLE for m in ranked)
    assert all(m.has_driving for m in ranked)


def test_unavailable_walking_does_not_matter():
    ranked = rank_and_bound([make_metric("drive_only", 300, walking_seconds=None)], 15)

    assert ids(ranked) == ["drive_only"]
    assert ranked[0].has_walking is False


def test_sorted_by_driving_time():
    metrics = [make_metric("c", 700), make_metric("a", 100), make_metric("b", 400)]

    assert ids(rank_and_bound(metrics, 15)) == ["a", "b", "c"]


def test_truncates_to_top_k():
    metrics = [make_metric(f"m{i}", 60 * i) for i in range(1, 10)]

    assert ids(rank_and_bound(metrics, 15, top_k=5)) == ["m1", "m2", "m3", "m4", "m5"]
    assert len(rank_and_bound(metrics[:3], 15, top_k=5)) == 3


def test_ties_keep_candidate_order():
    metrics = [make_metric("first", 300), make_metric("fast", 60), make_metric("second", 300), make_metric("third", 300)]

    assert ids(rank_and_bound(metrics, 15)) == ["fast", "first", "second", "third"]


def test_same_input_same_output():
    metrics = [make_metric("a", 500), make_metric("b", None), make_metric("c", 200)]

    assert rank_and_bound(metrics, 15) == rank_and_bound(metrics, 15)


def test_empty_when_nothing_within_budget():
    assert rank_and_bound([make_metric("far", 1800)], 15) == []
    assert rank_and_bound([], 15) == []


@pytest.mark.parametrize("minutes,top_k", [(-5, 5), (15, 0)])
def test_rejects_invalid_arguments(minutes, top_k):
    with pytest.raises(ValueError):
        rank_and_bound([make_metric("a", 60)], minutes, top_k=top_k)
