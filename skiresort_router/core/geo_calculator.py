"""Geodesic calculations on Earth's surface.

Provides the geographic helpers used around routing:
- Distance calculation (Haversine formula) for step lengths and the A* bound
- Bearing calculation (initial heading) for the compass direction of a step

Coordinates never influence path cost directly; edge cost is travel time.

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, degrees, radians, sin, sqrt

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84).
    Bearings are in degrees clockwise from North (0-360).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lng1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lng2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlng = radians(lng2 - lng1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def initial_bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate initial bearing from point 1 to point 2.

        The bearing is the compass direction to travel from start to end,
        measured clockwise from true North.

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        lat1_rad, lat2_rad = radians(lat1), radians(lat2)
        dlng = radians(lng2 - lng1)
        y = sin(dlng) * cos(lat2_rad)
        x = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlng)
        return (degrees(atan2(y, x)) + 360) % 360

    @staticmethod
    def travel_minutes(distance_m: float, speed_kmh: float) -> float:
        """Minutes needed to cover a distance at constant speed.

        Args:
            distance_m: Distance in meters
            speed_kmh: Speed in kilometers per hour (must be positive)

        Returns:
            Travel time in minutes.
        """
        if speed_kmh <= 0:
            raise ValueError(f"Speed must be positive, got {speed_kmh} km/h")
        return distance_m / (speed_kmh * 1000 / 60)
