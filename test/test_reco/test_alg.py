"""Tests for the shared shower algorithm object."""

import numpy as np
import pytest

from ember.calib import UniformSpaceCharge
from ember.data import HitAssociation, SpacePoint
from ember.reco import ShowerAlg


@pytest.fixture(name="alg")
def fixture_alg(geo, detprop):
    """Shower algorithm with a uniform space charge provider."""
    sce = UniformSpaceCharge(efield_offset=[0.02, 0.0, 0.0])
    return ShowerAlg(geo, detprop, sce=sce)


class TestShowerAlg:
    """Test the helpers exposed by the shower algorithm object."""

    def test_geometry(self, alg):
        """Test the projection helpers."""
        point = SpacePoint(0, [3.0, 4.0, 0.0])
        start, direction = np.zeros(3), np.array([1.0, 0.0, 0.0])

        assert alg.space_point_projection(point, start, direction) == 3.0
        assert alg.space_point_perpendicular(point, start, direction) == 4.0
        assert alg.distance_between_space_points(point, SpacePoint(1, [0, 0, 0])) == 5.0

    def test_orderings(self, alg, hit_factory):
        """Test the ordering helpers."""
        points = [SpacePoint(0, [0.0, 0.0, 2.0]), SpacePoint(1, [0.0, 1.0, 1.0])]
        direction = np.array([0.0, 0.0, 1.0])

        ordered = alg.order_space_points(points, np.zeros(3), direction)
        assert [p.id for p in ordered] == [1, 0]
        ordered = alg.order_space_points_perpendicular(points, np.zeros(3), direction)
        assert [p.id for p in ordered] == [0, 1]

        hits = [hit_factory(wire=w, peak_time=1250.0) for w in (4, 2)]
        start = np.array([100.0, 0.0, 0.0])
        assert [h.wire for h in alg.order_shower_hits(hits, start, direction)] == [2, 4]
        np.testing.assert_allclose(alg.hit_coordinates(hits[0]), [1.2, 100.0])

    def test_charge(self, alg, hit_factory):
        """Test the charge helpers."""
        points = [SpacePoint(0, [0.0, 0.0, 0.0]), SpacePoint(1, [2.0, 0.0, 0.0])]
        association = HitAssociation(
            {0: [hit_factory(integral=3.0)], 1: [hit_factory(integral=3.0)]}
        )

        centre, total = alg.shower_centre(points, association)
        np.testing.assert_allclose(centre, [1.0, 0.0, 0.0])
        assert total == pytest.approx(6.0)
        np.testing.assert_allclose(alg.geometric_centre(points), [1.0, 0.0, 0.0])
        assert alg.space_point_charge(points[0], association) == 3.0
        assert alg.space_point_time(points[0], association) == 0.0

    def test_direction(self, alg):
        """Test the transverse spread helpers."""
        assert alg.calculate_rms([3.0, 4.0]) == pytest.approx(5.0)
        points = [SpacePoint(i, [0.0, 0.0, float(i)]) for i in range(2)]
        assert alg.rms_shower_gradient(points, np.zeros(3), np.ones(3), 2) == 0.0

    def test_sce(self, alg):
        """Test the space charge corrections."""
        pos = np.array([100.0, 0.0, 100.0])
        pitch = alg.sce_correct_pitch(0.3, pos, np.array([0.0, 0.0, 2.0]), 1)
        assert pitch == pytest.approx(0.3)
        assert alg.sce_correct_efield(0.5, pos, 1) == pytest.approx(0.51)

    def test_snippets(self, alg, hit_factory):
        """Test the snippet organization helper."""
        hits = [hit_factory(integral=1.0), hit_factory(integral=2.0)]
        assert alg.organize_hits(hits) == {hits[1]: [hits[0]]}
