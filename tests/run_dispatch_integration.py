import asyncio

from dispatch.candidate_filter import select_candidates
from dispatch.metrics import fetch_metrics
from dispatch.scoring import rank_and_bound
from members.models import Member, MemberRole
from routing.matrix_adapter import OSRMMatrixProvider
from routing.osrm_client import OSRMClient
from routing.units import TravelMode

# Manual check against a live OSRM server (OSRM_BASE_URL in .env).
# The public demo server only has the car profile and ignores the profile
# name, so walking times printed here are really driving times.

def main():
    provider = OSRMMatrixProvider(clients={
        TravelMode.DRIVING: OSRMClient(profile="driving", timeout=10),
        TravelMode.WALKING: OSRMClient(profile="foot", timeout=10),
    })

    incident = (52.517037, 13.388860)   # (lat, lng)

    members = [
        Member.new("m1", "Anna", "Becker", "101", MemberRole.CHIEF, ["EMT"], 52.518000, 13.389500),
        Member.new("m2", "Ben", "Krause", "102", MemberRole.FULL_MEMBER, [], 52.515800, 13.386000),
        Member.new("m3", "Cem", "Yilmaz", "103", MemberRole.PROBATIONARY, [], 52.525000, 13.410000),
        Member.new("m4", "Dana", "Vogel", "104", MemberRole.LIFE, []),  # never geocoded
    ]

    candidates = select_candidates(members, incident, limit=20)
    metrics = asyncio.run(fetch_metrics(candidates, incident, provider))
    ranked = rank_and_bound(metrics, max_driving_minutes=15, top_k=5)

    print(f"\nReturned {len(ranked)} of {len(candidates)} candidates:\n")
    for metric in ranked:
        walking = metric.walking.duration_text if metric.has_walking else "n/a"
        print(
            f"{metric.member.full_name}: "
            f"drive {metric.driving.duration_text} ({metric.driving.distance_text}) | "
            f"walk {walking}"
        )

if __name__ == "__main__":
    main()
