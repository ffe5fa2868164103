"""Tests for planar area, grid-tile detection and vertex counting."""

import pytest

from utils.geometry_metrics import (
    count_geometry_vertices,
    count_ring_vertices,
    is_axis_aligned_quad,
    outer_ring,
    planar_magnitude
)


@pytest.mark.unit
class TestPlanarMagnitude:
    def test_unit_rectangle(self):
        assert planar_magnitude([[0, 0], [2, 0], [2, 1], [0, 1], [0, 0]]) == 2.0

    def test_orientation_does_not_matter(self):
        clockwise = [[0, 0], [0, 1], [2, 1], [2, 0], [0, 0]]
        assert planar_magnitude(clockwise) == 2.0

    def test_geographic_rectangle(self, rectangle_ring):
        assert planar_magnitude(rectangle_ring(0.004, 0.005)) == pytest.approx(0.00002)

    def test_extra_edge_vertex_keeps_area(self, rectangle_ring):
        ring = rectangle_ring(0.01, 0.01, split_bottom=True)
        assert len(ring) == 6
        assert planar_magnitude(ring) == pytest.approx(0.0001)

    @pytest.mark.parametrize('ring', [None, [], [[24.3, 49.95]]])
    def test_fewer_than_two_points(self, ring):
        assert planar_magnitude(ring) == 0.0

    def test_malformed_coordinates(self):
        assert planar_magnitude([['a', 1], [2, 3]]) == 0.0
        assert planar_magnitude([[1], [2, 3]]) == 0.0


@pytest.mark.unit
class TestAxisAlignedQuad:
    def test_rectangle(self, rectangle_ring):
        assert is_axis_aligned_quad(rectangle_ring(0.004, 0.005))

    def test_slight_trapezoid_within_tolerance(self):
        ring = [[0, 0], [1, 0.00002], [1.00003, 1], [0, 1], [0, 0]]
        assert is_axis_aligned_quad(ring)

    def test_skewed_corner_outside_tolerance(self):
        ring = [[0, 0], [1, 0], [1.5, 1], [0, 1], [0, 0]]
        assert not is_axis_aligned_quad(ring)

    @pytest.mark.parametrize('length', [4, 6])
    def test_only_five_coordinates_qualify(self, length):
        ring = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0], [0, 0]][:length]
        assert not is_axis_aligned_quad(ring)

    def test_malformed(self):
        assert not is_axis_aligned_quad(None)
        assert not is_axis_aligned_quad([[0, 0], ['x', 0], [1, 1], [0, 1], [0, 0]])


@pytest.mark.unit
class TestVertexCounting:
    def test_outer_ring(self, rectangle_ring):
        ring = rectangle_ring(0.001, 0.001)
        assert outer_ring({'type': 'Polygon', 'coordinates': [ring]}) == ring

    def test_outer_ring_non_polygon(self):
        assert outer_ring({'type': 'Point', 'coordinates': [24.3, 49.95]}) is None
        assert outer_ring({'type': 'Polygon', 'coordinates': []}) is None
        assert outer_ring(None) is None

    def test_ring_count_includes_closing_point(self, rectangle_ring):
        assert count_ring_vertices(rectangle_ring(0.001, 0.001)) == 5
        assert count_ring_vertices(None) == 0

    def test_polygon_with_hole(self):
        geometry = {
            'type': 'Polygon',
            'coordinates': [
                [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]],
                [[1, 1], [2, 1], [2, 2], [1, 1]]
            ]
        }
        assert count_geometry_vertices(geometry) == 9

    def test_multipolygon(self):
        square = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
        geometry = {'type': 'MultiPolygon', 'coordinates': [[square], [square]]}
        assert count_geometry_vertices(geometry) == 10

    def test_other_geometry_types(self):
        assert count_geometry_vertices({'type': 'Point', 'coordinates': [0, 0]}) == 0
        assert count_geometry_vertices(None) == 0
