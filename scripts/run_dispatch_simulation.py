import argparse
import asyncio
import time
from typing import List

import pandas as pd

from dispatch.dispatcher import DispatchSession
from dispatch.policy import policy_from_env
from dispatch.state_machines.session_state import SettledOutcome
from members.filters import MemberFilter, filter_members
from members.models import Member, MemberRole
from routing.geocoder import GoogleGeocoder
from routing.google_distance_matrix import GoogleDistanceMatrixProvider
from routing.matrix_adapter import OSRMMatrixProvider


def load_members(filepath: str) -> List[Member]:
    df = pd.read_csv(filepath, dtype={"member_id": str, "fd_id_number": str})
    df = df.fillna({"qualifications": "", "status": "REGULAR"})

    members = []
    for _, row in df.iterrows():
        has_location = pd.notna(row.get("lat")) and pd.notna(row.get("lng"))
        members.append(
            Member.new(
                member_id=row["member_id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                fd_id_number=row["fd_id_number"],
                role=row["role"],
                qualifications=str(row["qualifications"]).split(";"),
                lat=float(row["lat"]) if has_location else None,
                lng=float(row["lng"]) if has_location else None,
                status=row["status"],
            )
        )
    return members


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Find the closest responders to an incident address.")
    parser.add_argument("address", help="incident address, e.g. '12 Garfield Rd, Chester NY'")
    parser.add_argument("--members", default="mock_members_100.csv", help="member CSV (see generate_mock_members.py)")
    parser.add_argument("--minutes", type=int, default=None, choices=range(5, 65, 5), metavar="{5..60}",
                        help="max driving minutes (5-60, step 5)")
    parser.add_argument("--search", default="", help="directory search term (name or FD ID)")
    parser.add_argument("--role", action="append", default=[], choices=[r.value for r in MemberRole])
    parser.add_argument("--qualification", action="append", default=[])
    parser.add_argument("--router", choices=["google", "osrm"], default="google",
                        help="travel-time service (OSRM needs OSRM_BASE_URL in .env)")
    return parser.parse_args(argv)


def run_simulation():
    args = parse_args()
    print("=== CLOSEST RESPONDER SEARCH ===")

    # 1. Load Data
    members = load_members(args.members)
    member_filter = MemberFilter(
        search_term=args.search,
        roles=frozenset(MemberRole(r) for r in args.role),
        qualifications=frozenset(args.qualification),
    )
    in_view = filter_members(members, member_filter)
    print(f"Loaded {len(members)} Members, {len(in_view)} in view.\n")

    # 2. Configure System
    policy = policy_from_env()
    provider = GoogleDistanceMatrixProvider() if args.router == "google" else OSRMMatrixProvider()
    session = DispatchSession(geocoder=GoogleGeocoder(), matrix_provider=provider, policy=policy)

    # 3. Run one search
    start_time = time.time()
    state = asyncio.run(session.search_address(args.address, in_view, args.minutes))
    print(f"Search settled as {state.outcome.value} in {time.time() - start_time:.2f}s.\n")

    # 4. Report
    if state.outcome == SettledOutcome.ERROR:
        print(f"[FAILED] {state.error.message}")
        return

    if state.outcome == SettledOutcome.EMPTY:
        print(f"No responders within {state.max_driving_minutes} minutes of {args.address}.")
        return

    print(f"--- Closest Responders to {state.result.target.raw_address_text} ---")
    for rank, metric in enumerate(state.result.responders, 1):
        walking = (
            f"{metric.walking.duration_text} ({metric.walking.distance_text})"
            if metric.has_walking else "n/a"
        )
        driving = (
            f"{metric.driving.duration_text} ({metric.driving.distance_text})"
            if metric.has_driving else "n/a"
        )
        print(
            f"{rank}. {metric.member.full_name} [{metric.member.role.label}] "
            f"drive {driving} | walk {walking}"
        )

if __name__ == "__main__":
    run_simulation()
