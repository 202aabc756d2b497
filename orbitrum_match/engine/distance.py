"""Great-circle distance between two points (Haversine)."""

import math

from orbitrum_match.core.schemas import ClientLocation

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the Haversine distance in kilometres between two lat/lon points.

    Inputs are degrees. Out-of-range coordinates are not rejected; validate
    them before calling.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: ClientLocation, b: ClientLocation) -> float:
    """Distance in km between two location models."""
    return distance_km(a.latitude, a.longitude, b.latitude, b.longitude)
