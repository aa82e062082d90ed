#Purpose: Straight-line (great-circle) distance between two coordinates.
#Pure math, no network. Used as the cheap proxy before asking a routing
#service for real travel times.

import math
from typing import Tuple

#internal coordinate type : (lat, lng)
LatLng = Tuple[float, float]

EARTH_RADIUS_M = 6_371_008.8  # mean Earth radius


def great_circle_meters(a: LatLng, b: LatLng) -> float:
    """
    Haversine distance in meters between two (lat, lng) points.
    """
    lat1, lng1 = a
    lat2, lng2 = b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # clamp: floating error can push h slightly above 1 for antipodal points
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, h)))
