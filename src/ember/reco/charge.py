"""Charge-weighted shower centre estimation."""

from typing import Sequence, Tuple

import numpy as np

from ember.calib import LifetimeCalibrator
from ember.data import SpacePoint
from ember.math import sample_std
from ember.utils.globals import CHARGE_TRIM_NSIGMA, DBL_EPSILON
from ember.utils.logger import logger

from .ordering import get_positions

__all__ = ["ChargeCentroidEstimator", "geometric_centre"]


def geometric_centre(points: Sequence[SpacePoint]) -> np.ndarray:
    """Unweighted average position of a set of space points.

    Parameters
    ----------
    points : Sequence[SpacePoint]
        Space points

    Returns
    -------
    np.ndarray
        (3) Centre position. If there is no point, all coordinates are set
        to `-np.inf` (unset).
    """
    if not len(points):
        return np.full(3, -np.inf)

    return np.mean(get_positions(points), axis=0)


class ChargeCentroidEstimator:
    """Computes the charge-weighted centre of a set of space points.

    The charge of each space point is derived from the lifetime-corrected
    charge of its hits. Either the charge of its collection hit is used, or
    the average of the charges of all its hits after removing outliers.
    """

    def __init__(self, lifetime: LifetimeCalibrator, use_collection_only=False):
        """Store the charge estimation parameters.

        Parameters
        ----------
        lifetime : LifetimeCalibrator
            Lifetime correction applied to the hit charges
        use_collection_only : bool, default False
            If `True`, only use the charge of the collection plane hit
        """
        self.lifetime = lifetime
        self.use_collection_only = use_collection_only

    def point_charge(self, hits) -> float:
        """Lifetime-corrected charge of a single space point.

        Parameters
        ----------
        hits : List[Hit]
            Hits associated with the space point

        Returns
        -------
        float
            Space point charge
        """
        # If requested, only use the first collection hit
        if self.use_collection_only:
            for hit in hits:
                if hit.is_collection:
                    return self.lifetime.process_hit(hit)

            return 0.0

        if not len(hits):
            return 0.0

        # Average the charge, then remove the hits beyond two standard deviations
        charges = np.array([self.lifetime.process_hit(hit) for hit in hits])
        mean = np.mean(charges)
        rms = sample_std(charges) if len(charges) > 1 else 1.0

        low = mean - CHARGE_TRIM_NSIGMA * rms
        high = mean + CHARGE_TRIM_NSIGMA * rms
        mask = (charges >= low) & (charges <= high)
        if not np.any(mask):
            logger.warning("No hit was used to compute the space point charge.")
            return 0.0

        return float(np.mean(charges[mask]))

    def shower_centre(
        self, points: Sequence[SpacePoint], association
    ) -> Tuple[np.ndarray, float]:
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
            (3) Charge-weighted centre. If the total charge is null, all
            coordinates are set to `-np.inf` (unset).
        float
            Total charge of the space points
        """
        charge_point = np.zeros(3)
        total_charge = 0.0
        for point in points:
            charge = self.point_charge(association(point))
            if charge == 0.0:
                logger.warning(
                    "Averaged charge, within 2 sigma, for a space point is zero."
                )

            charge_point += charge * point.position
            total_charge += charge

        if abs(total_charge) < DBL_EPSILON:
            logger.warning(
                "The total charge of the space points is zero, cannot compute "
                "a charge-weighted centre."
            )
            return np.full(3, -np.inf), total_charge

        return charge_point / total_charge, total_charge

    @staticmethod
    def space_point_charge(point: SpacePoint, association) -> float:
        """Average raw charge integral of the hits of a space point.

        Parameters
        ----------
        point : SpacePoint
            Space point
        association : callable
            Function which returns the hits associated with a space point

        Returns
        -------
        float
            Average hit integral in ADC, 0 if the point has no hit
        """
        hits = association(point)
        if not len(hits):
            logger.warning("Space point %d has no associated hit.", point.id)
            return 0.0

        return float(np.mean([hit.integral for hit in hits]))

    @staticmethod
    def space_point_time(point: SpacePoint, association) -> float:
        """Average peak time of the hits of a space point.

        Parameters
        ----------
        point : SpacePoint
            Space point
        association : callable
            Function which returns the hits associated with a space point

        Returns
        -------
        float
            Average hit peak time in ticks, 0 if the point has no hit
        """
        hits = association(point)
        if not len(hits):
            logger.warning("Space point %d has no associated hit.", point.id)
            return 0.0

        return float(np.mean([hit.peak_time for hit in hits]))
