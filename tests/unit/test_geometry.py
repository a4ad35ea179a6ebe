"""
Tests for geometry functions.
"""
import pytest
import math
from rf_link_planner.core.geometry import (
    haversine_distance,
    calculate_bearing,
    destination_point,
    get_distance_and_bearing,
    normalize_longitude,
    EARTH_RADIUS_M,
)


class TestHaversineDistance:
    """Tests for haversine_distance function."""

    def test_same_point(self):
        """Distance from a point to itself should be zero."""
        distance = haversine_distance(53.3498, -6.2603, 53.3498, -6.2603)
        assert distance == 0.0

    def test_one_degree_on_equator(self):
        """One degree of longitude on the equator is ~111,195 m on this sphere."""
        distance = haversine_distance(0, 0, 0, 1)
        assert distance == pytest.approx(111195, abs=50)

    def test_dublin_to_cork(self):
        """Test known distance: Dublin to Cork, Ireland (~219 km)."""
        distance = haversine_distance(53.3498, -6.2603, 51.8985, -8.4756)
        assert distance == pytest.approx(219400, rel=0.01)

    def test_symmetric(self):
        """Distance should not depend on direction."""
        pairs = [
            (23.2599, 77.4126, 23.5251, 77.8081),
            (-33.8688, 151.2093, -37.8136, 144.9631),
            (89.0, 10.0, 88.5, -170.0),
            (0.0, 179.9, 0.0, -179.9),
        ]
        for lat1, lon1, lat2, lon2 in pairs:
            assert haversine_distance(lat1, lon1, lat2, lon2) == \
                pytest.approx(haversine_distance(lat2, lon2, lat1, lon1))

    def test_across_antimeridian(self):
        """Points either side of the date line are close, not half a world apart."""
        distance = haversine_distance(0.0, 179.9, 0.0, -179.9)
        assert distance == pytest.approx(2 * 11119.5, rel=0.01)

    def test_antipodal_points(self):
        """Antipodal points are half the circumference apart."""
        distance = haversine_distance(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(math.pi * EARTH_RADIUS_M)


class TestCalculateBearing:
    """Tests for calculate_bearing function."""

    def test_bearing_north(self):
        """Bearing directly north should be 0°."""
        assert calculate_bearing(53.0, -6.0, 54.0, -6.0) == pytest.approx(0.0, abs=1e-9)

    def test_bearing_east(self):
        """Bearing east along the equator should be 90°."""
        assert calculate_bearing(0.0, 0.0, 0.0, 1.0) == pytest.approx(90.0)

    def test_bearing_south(self):
        """Bearing directly south should be 180°."""
        assert calculate_bearing(54.0, -6.0, 53.0, -6.0) == pytest.approx(180.0)

    def test_bearing_west(self):
        """Bearing roughly west should be near 270°."""
        bearing = calculate_bearing(53.0, -5.0, 53.0, -6.0)
        assert bearing == pytest.approx(270.0, abs=0.5)

    def test_bearing_range(self):
        """Bearing should always be in range [0, 360)."""
        test_points = [
            (53.0, -6.0, 54.0, -5.0),
            (53.0, -6.0, 52.0, -5.0),
            (53.0, -6.0, 52.0, -7.0),
            (53.0, -6.0, 54.0, -7.0),
            (53.0, -6.0, 53.0, -6.0),
        ]

        for lat1, lon1, lat2, lon2 in test_points:
            bearing = calculate_bearing(lat1, lon1, lat2, lon2)
            assert 0 <= bearing < 360


class TestDestinationPoint:
    """Tests for destination_point function."""

    def test_zero_distance_returns_origin(self):
        """Travelling zero meters leaves the point unchanged."""
        for bearing in (0.0, 45.0, 271.3):
            assert destination_point(23.2599, 77.4126, bearing, 0) == (23.2599, 77.4126)

    def test_due_east_on_equator(self):
        """111,195 m east from (0, 0) lands on (0, 1)."""
        lat, lon = destination_point(0.0, 0.0, 90.0, 111195.0)
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(1.0, abs=1e-4)

    def test_negative_distance_goes_backwards(self):
        """A negative distance travels the reverse bearing."""
        forward = destination_point(10.0, 20.0, 270.0, 5000.0)
        backward = destination_point(10.0, 20.0, 90.0, -5000.0)
        assert forward[0] == pytest.approx(backward[0])
        assert forward[1] == pytest.approx(backward[1])

    @pytest.mark.parametrize("a, b", [
        ((23.2599, 77.4126), (23.5251, 77.8081)),
        ((53.3498, -6.2603), (51.8985, -8.4756)),
        ((-33.8688, 151.2093), (-37.8136, 144.9631)),
        ((60.0, 5.0), (61.0, 25.0)),
    ])
    def test_round_trip(self, a, b):
        """Projecting along bearing(a, b) for distance(a, b) arrives at b."""
        distance, bearing = get_distance_and_bearing(a[0], a[1], b[0], b[1])
        lat, lon = destination_point(a[0], a[1], bearing, distance)

        assert haversine_distance(lat, lon, b[0], b[1]) < 0.1

    def test_crossing_the_pole(self):
        """Heading north past the pole comes down the opposite meridian."""
        lat, lon = destination_point(89.9, 0.0, 0.0, 50000.0)
        assert lat == pytest.approx(89.65, abs=0.01)
        assert abs(lon) == pytest.approx(180.0)

    def test_starting_at_pole(self):
        """Projection from the pole stays finite and in range."""
        lat, lon = destination_point(90.0, 0.0, 180.0, 1000.0)
        assert -90 <= lat <= 90
        assert math.isfinite(lon)
        assert lat == pytest.approx(90.0 - 1000.0 / 111195.0, abs=1e-4)

    def test_longitude_wraps_at_antimeridian(self):
        """Crossing 180° east wraps longitude into the western hemisphere."""
        lat, lon = destination_point(0.0, 179.5, 90.0, 111195.0)
        assert lon == pytest.approx(-179.5, abs=1e-3)


class TestNormalizeLongitude:
    """Tests for normalize_longitude function."""

    def test_in_range_unchanged(self):
        assert normalize_longitude(77.5) == pytest.approx(77.5)
        assert normalize_longitude(-120.0) == pytest.approx(-120.0)

    def test_wraps_east(self):
        assert normalize_longitude(190.0) == pytest.approx(-170.0)

    def test_wraps_west(self):
        assert normalize_longitude(-190.0) == pytest.approx(170.0)

    def test_dateline(self):
        assert normalize_longitude(180.0) == pytest.approx(-180.0)


class TestGetDistanceAndBearing:
    """Tests for get_distance_and_bearing function."""

    def test_matches_individual_functions(self):
        """Should match calling haversine_distance and calculate_bearing separately."""
        lat1, lon1 = 53.3498, -6.2603
        lat2, lon2 = 53.3500, -6.2600

        distance, bearing = get_distance_and_bearing(lat1, lon1, lat2, lon2)

        assert distance == pytest.approx(haversine_distance(lat1, lon1, lat2, lon2))
        assert bearing == pytest.approx(calculate_bearing(lat1, lon1, lat2, lon2))
