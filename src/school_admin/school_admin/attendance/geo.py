from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> int:
    """Great-circle distance in whole metres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_M * c)
