# gpxtojson/analyze/distance.py
"""
Great-circle distance and speed helpers for gpxtojson
"""

from haversine import haversine, Unit

# Fixed spherical Earth radius (meters)
EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in meters between two lat/lon pairs given in degrees.

    The haversine package returns the central angle when asked for radians;
    scaling by EARTH_RADIUS_M keeps the radius fixed regardless of the
    package's own mean-radius constant. Range checking is off so any finite
    degree values are accepted.
    """
    c = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS, check=False)
    return EARTH_RADIUS_M * c


def speed_kmh(distance_m: float, duration_s: int) -> float:
    """Return speed in km/h, or 0.0 when duration is not positive."""
    if duration_s <= 0:
        return 0.0
    return (distance_m / 1000) / (duration_s / 60 / 60)
