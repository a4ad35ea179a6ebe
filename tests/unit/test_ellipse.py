"""
Tests for Fresnel ellipse sampling.
"""
import math
import pytest
from rf_link_planner.core.ellipse import generate_fresnel_ellipse, DEFAULT_ELLIPSE_STEPS
from rf_link_planner.core.geometry import haversine_distance
from rf_link_planner.utils.exceptions import GeometryError


# Two towers ~42 km apart in central India
A = (22.5, 77.5)
B = (22.6, 77.9)


class TestGenerateFresnelEllipse:
    """Tests for generate_fresnel_ellipse function."""

    def test_default_point_count(self):
        """180 segments give a closed ring of 181 points."""
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 38.7)
        assert DEFAULT_ELLIPSE_STEPS == 180
        assert len(ring) == 181

    def test_custom_steps(self):
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 38.7, steps=36)
        assert len(ring) == 37

    def test_ring_is_closed(self):
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 38.7)
        assert ring[0][0] == pytest.approx(ring[-1][0], abs=1e-9)
        assert ring[0][1] == pytest.approx(ring[-1][1], abs=1e-9)

    def test_points_in_range(self):
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 500.0, steps=180)
        for lat, lon in ring:
            assert -90 <= lat <= 90
            assert math.isfinite(lon)

    def test_major_axis_reaches_endpoints(self):
        """The ring's far ends sit close to the two towers."""
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 38.7, steps=180)

        # angle 0 points toward B, angle pi points back toward A
        assert haversine_distance(ring[0][0], ring[0][1], B[0], B[1]) < 100
        assert haversine_distance(ring[90][0], ring[90][1], A[0], A[1]) < 100

    def test_minor_axis_is_radius(self):
        """A quarter turn from the major axis lies one radius from the center."""
        radius = 250.0
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], radius, steps=180)
        center = ((A[0] + B[0]) / 2, (A[1] + B[1]) / 2)

        for index in (45, 135):
            lat, lon = ring[index]
            assert haversine_distance(center[0], center[1], lat, lon) == \
                pytest.approx(radius, rel=1e-3)

    def test_zero_radius_collapses_to_path(self):
        ring = generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 0.0, steps=4)
        center = ((A[0] + B[0]) / 2, (A[1] + B[1]) / 2)
        lat, lon = ring[1]
        assert lat == pytest.approx(center[0], abs=1e-9)
        assert lon == pytest.approx(center[1], abs=1e-9)

    def test_coincident_endpoints(self):
        """Degenerate link: every sample is the tower itself."""
        ring = generate_fresnel_ellipse(A[0], A[1], A[0], A[1], 0.0, steps=8)
        assert len(ring) == 9
        for lat, lon in ring:
            assert lat == pytest.approx(A[0])
            assert lon == pytest.approx(A[1])

    def test_near_pole(self):
        """Sampling near the pole stays finite and in range."""
        ring = generate_fresnel_ellipse(89.5, 0.0, 89.8, 120.0, 1000.0)
        assert len(ring) == 181
        for lat, lon in ring:
            assert -90 <= lat <= 90
            assert math.isfinite(lon)

    def test_invalid_steps(self):
        with pytest.raises(GeometryError):
            generate_fresnel_ellipse(A[0], A[1], B[0], B[1], 38.7, steps=0)
