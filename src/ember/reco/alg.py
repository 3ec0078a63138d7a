"""Shared algorithm object exposing the shower reconstruction helpers."""

import numpy as np

from ember.calib import LifetimeCalibrator, SpaceChargeCorrector

from . import charge, direction, ordering, snippets

__all__ = ["ShowerAlg"]


class ShowerAlg:
    """Bundles the geometric, calorimetric and ordering helpers used by the
    shower reconstruction tools behind a single object.

    The detector services (geometry, detector properties and space charge
    provider) are provided once at construction time and used by all the
    methods which need them.
    """

    def __init__(
        self, geo, detprop, sce=None, use_collection_only=False, lifetime=None
    ):
        """Store the detector services.

        Parameters
        ----------
        geo : Geometry
            Detector geometry
        detprop : DetectorProperties
            Detector properties
        sce : SpaceChargeBase, optional
            Space charge provider
        use_collection_only : bool, default False
            Only use collection hits to compute space point charges
        lifetime : LifetimeCalibrator, optional
            Lifetime correction. If not specified, it is built from the
            detector properties.
        """
        self.geo = geo
        self.detprop = detprop
        self.corrector = SpaceChargeCorrector(sce)

        if lifetime is None:
            lifetime = LifetimeCalibrator.from_detprop(detprop, geo.num_tpcs)
        self.centroid = charge.ChargeCentroidEstimator(lifetime, use_collection_only)

    def order_shower_hits(self, hits, start, direction):
        """See :func:`ember.reco.ordering.order_shower_hits`."""
        return ordering.order_shower_hits(
            hits, start, direction, self.geo, self.detprop
        )

    def hit_coordinates(self, hit):
        """See :func:`ember.reco.ordering.hit_coordinates`."""
        return ordering.hit_coordinates(hit, self.geo, self.detprop)

    @staticmethod
    def order_space_points(points, start, direction=None):
        """See :func:`ember.reco.ordering.order_space_points`."""
        return ordering.order_space_points(points, start, direction)

    @staticmethod
    def order_space_points_perpendicular(points, start, direction):
        """See :func:`ember.reco.ordering.order_space_points_perpendicular`."""
        return ordering.order_space_points_perpendicular(points, start, direction)

    @staticmethod
    def space_point_projection(point, start, direction):
        """See :func:`ember.reco.ordering.space_point_projection`."""
        return ordering.space_point_projection(point, start, direction)

    @staticmethod
    def space_point_perpendicular(point, start, direction, proj=None):
        """See :func:`ember.reco.ordering.space_point_perpendicular`."""
        return ordering.space_point_perpendicular(point, start, direction, proj)

    @staticmethod
    def distance_between_space_points(point_a, point_b):
        """See :func:`ember.reco.ordering.distance_between_space_points`."""
        return ordering.distance_between_space_points(point_a, point_b)

    def shower_centre(self, points, association):
        """Charge-weighted centre of a set of space points.

        Parameters
        ----------
        points : Sequence[SpacePoint]
            Space points
        association : callable
            Function which returns the hits associated with a space point

        Returns
        -------
        np.ndarray
            (3) Charge-weighted centre
        float
            Total charge of the space points
        """
        return self.centroid.shower_centre(points, association)

    @staticmethod
    def geometric_centre(points):
        """See :func:`ember.reco.charge.geometric_centre`."""
        return charge.geometric_centre(points)

    @staticmethod
    def space_point_charge(point, association):
        """See :meth:`ember.reco.charge.ChargeCentroidEstimator.space_point_charge`."""
        return charge.ChargeCentroidEstimator.space_point_charge(point, association)

    @staticmethod
    def space_point_time(point, association):
        """See :meth:`ember.reco.charge.ChargeCentroidEstimator.space_point_time`."""
        return charge.ChargeCentroidEstimator.space_point_time(point, association)

    @staticmethod
    def rms_shower_gradient(points, centre, axis, num_segments):
        """See :func:`ember.reco.direction.rms_shower_gradient`."""
        return direction.rms_shower_gradient(points, centre, axis, num_segments)

    @staticmethod
    def calculate_rms(perps):
        """See :func:`ember.reco.direction.calculate_rms`."""
        return direction.calculate_rms(perps)

    def sce_correct_pitch(self, pitch, pos, direction, tpc_id):
        """Corrects a track pitch for space charge distortions.

        Parameters
        ----------
        pitch : float
            Track pitch, in cm
        pos : np.ndarray
            (3) Corrected position of the point
        direction : np.ndarray
            (3) Track direction at the point (normalized internally)
        tpc_id : int
            Index of the TPC

        Returns
        -------
        float
            Corrected pitch, in cm
        """
        direction = np.asarray(direction, dtype=np.float64)
        direction = direction / np.linalg.norm(direction)

        return self.corrector.correct_pitch(pitch, pos, direction, tpc_id)

    def sce_correct_efield(self, efield, pos, tpc_id):
        """See :meth:`ember.calib.SpaceChargeCorrector.correct_efield`."""
        return self.corrector.correct_efield(efield, pos, tpc_id)

    @staticmethod
    def organize_hits(hits):
        """See :func:`ember.reco.snippets.organize_hits`."""
        return snippets.organize_hits(hits)
