"""Tests for the ordering of shower hits and space points."""

import numpy as np
import pytest

from ember.data import SpacePoint
from ember.reco import (
    distance_between_space_points,
    get_positions,
    hit_coordinates,
    order_shower_hits,
    order_space_points,
    order_space_points_perpendicular,
    space_point_perpendicular,
    space_point_projection,
)

# Tick at which hits of TPC 1 are at x = 100 cm with the default properties
TICK_X100 = 1250.0


class TestDistances:
    """Test the projections and distances between space points."""

    def test_projection(self):
        """Test the projection and perpendicular distance of a point."""
        point = SpacePoint(0, [3.0, 4.0, 0.0])
        start, direction = np.zeros(3), np.array([1.0, 0.0, 0.0])

        assert space_point_projection(point, start, direction) == pytest.approx(3.0)
        assert space_point_perpendicular(point, start, direction) == pytest.approx(4.0)
        assert space_point_perpendicular(
            point, start, direction, 3.0
        ) == pytest.approx(4.0)

    def test_raw_positions(self):
        """Test that raw positions are accepted in place of space points."""
        start, direction = np.zeros(3), np.array([0.0, 1.0, 0.0])
        assert space_point_projection(
            np.array([3.0, 4.0, 0.0]), start, direction
        ) == pytest.approx(4.0)

    def test_distance(self):
        """Test the distance between two space points."""
        point_a = SpacePoint(0, [1.0, 1.0, 1.0])
        point_b = SpacePoint(1, [1.0, 4.0, 5.0])
        assert distance_between_space_points(point_a, point_b) == pytest.approx(5.0)

    def test_positions(self):
        """Test stacking the positions of space points."""
        assert get_positions([]).shape == (0, 3)
        points = [SpacePoint(0, [1, 2, 3]), SpacePoint(1, [4, 5, 6])]
        np.testing.assert_array_equal(get_positions(points), [[1, 2, 3], [4, 5, 6]])


class TestOrderSpacePoints:
    """Test the ordering of space points."""

    @pytest.fixture(name="points")
    def fixture_points(self):
        """Space points scattered along z."""
        return [
            SpacePoint(0, [0.0, 0.0, 3.0]),
            SpacePoint(1, [0.0, 2.0, 1.0]),
            SpacePoint(2, [0.0, 0.5, 2.0]),
        ]

    def test_projection(self, points):
        """Test ordering along a direction."""
        ordered = order_space_points(points, np.zeros(3), np.array([0.0, 0.0, 1.0]))
        assert [p.id for p in ordered] == [1, 2, 0]

        ordered = order_space_points(points, np.zeros(3), np.array([0.0, 0.0, -1.0]))
        assert [p.id for p in ordered] == [0, 2, 1]

    def test_distance(self, points):
        """Test ordering by distance from the start position."""
        ordered = order_space_points(points, np.array([0.0, 0.0, 3.0]))
        assert [p.id for p in ordered] == [0, 2, 1]

    def test_perpendicular(self, points):
        """Test ordering by distance from an axis."""
        ordered = order_space_points_perpendicular(
            points, np.zeros(3), np.array([0.0, 0.0, 1.0])
        )
        assert [p.id for p in ordered] == [0, 2, 1]

    def test_ties(self):
        """Test that points with the same key keep their input order."""
        points = [SpacePoint(i, [float(i), 0.0, 1.0]) for i in range(4)]
        ordered = order_space_points(points, np.zeros(3), np.array([0.0, 0.0, 1.0]))
        assert [p.id for p in ordered] == [0, 1, 2, 3]

    def test_empty(self):
        """Test ordering an empty set."""
        assert order_space_points([], np.zeros(3)) == []
        assert order_space_points_perpendicular([], np.zeros(3), np.ones(3)) == []


class TestOrderShowerHits:
    """Test the ordering of shower hits in a plane."""

    @pytest.fixture(name="hits")
    def fixture_hits(self, hit_factory):
        """Collection hits of TPC 1, all at x = 100 cm."""
        return [hit_factory(wire=w, peak_time=TICK_X100) for w in (5, 1, 3)]

    def test_coordinates(self, hits, geo, detprop):
        """Test the 2D coordinates of a hit."""
        np.testing.assert_allclose(hit_coordinates(hits[0], geo, detprop), [1.5, 100.0])

    def test_order(self, hits, geo, detprop):
        """Test ordering hits along the shower direction."""
        start = np.array([100.0, 0.0, 0.0])
        ordered = order_shower_hits(hits, start, np.array([0, 0, 1.0]), geo, detprop)
        assert [h.wire for h in ordered] == [1, 3, 5]

    def test_orientation(self, hits, geo, detprop):
        """Test that the order does not depend on the direction sign."""
        start = np.array([100.0, 0.0, 0.0])
        ordered = order_shower_hits(hits, start, np.array([0, 0, -1.0]), geo, detprop)
        assert [h.wire for h in ordered] == [1, 3, 5]

    def test_input_order(self, hits, geo, detprop):
        """Test that the order does not depend on the input order."""
        start, direction = np.array([100.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0])
        ordered = order_shower_hits(hits, start, direction, geo, detprop)
        reordered = order_shower_hits(ordered[::-1], start, direction, geo, detprop)
        assert reordered == ordered

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_ties(self, hit_factory, geo, detprop, sign):
        """Test that distinct hits with the same projection are all kept,
        in their input order, for either direction sign.
        """
        first = hit_factory(wire=1, peak_time=TICK_X100)
        tie_a = hit_factory(wire=3, peak_time=TICK_X100)
        tie_b = hit_factory(wire=3, peak_time=TICK_X100)
        last = hit_factory(wire=5, peak_time=TICK_X100)

        start = np.array([100.0, 0.0, 0.0])
        direction = np.array([0.0, 0.0, sign])
        hits = [last, tie_a, first, tie_b]
        ordered = order_shower_hits(hits, start, direction, geo, detprop)
        assert len(ordered) == 4
        assert ordered[0] is first and ordered[3] is last
        assert ordered[1] is tie_a and ordered[2] is tie_b

        swapped = [last, tie_b, first, tie_a]
        ordered = order_shower_hits(swapped, start, direction, geo, detprop)
        assert ordered[1] is tie_b and ordered[2] is tie_a

    def test_other_plane(self, hits, hit_factory, geo, detprop):
        """Test that the ordering stops at the first hit of another plane."""
        hits = hits[:2] + [hit_factory(plane=1, wire=0)] + hits[2:]
        start = np.array([100.0, 0.0, 0.0])
        ordered = order_shower_hits(hits, start, np.array([0, 0, 1.0]), geo, detprop)
        assert [h.wire for h in ordered] == [1, 5]

    def test_empty(self, geo, detprop):
        """Test that an empty set of hits raises."""
        with pytest.raises(ValueError):
            order_shower_hits([], np.zeros(3), np.ones(3), geo, detprop)
