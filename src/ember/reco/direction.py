"""Validation of a shower direction from the evolution of its transverse
spread along the shower axis.

An electromagnetic shower widens as it develops. Splitting the shower in
segments along a candidate direction, the RMS of the perpendicular distance of
the points to the axis should therefore increase from one segment to the
next. A negative gradient indicates that the direction is likely reversed.
"""

from typing import Sequence

import numpy as np

from ember.data import SpacePoint
from ember.math import linalg, linear_slope, rms, round_half_away
from ember.utils.errors import ConfigurationError
from ember.utils.globals import DBL_EPSILON

from .ordering import get_positions

__all__ = ["calculate_rms", "rms_shower_gradient"]


def calculate_rms(perps) -> float:
    """RMS of a set of perpendicular distances, w.r.t. zero.

    Parameters
    ----------
    perps : Sequence[float]
        Perpendicular distances

    Returns
    -------
    float
        RMS using the unbiased (n - 1) denominator, `-np.inf` if there are
        fewer than two values
    """
    if len(perps) < 2:
        return -np.inf

    return float(rms(np.asarray(perps, dtype=np.float64)))


def rms_shower_gradient(
    points: Sequence[SpacePoint], centre, direction, num_segments: int
) -> float:
    """Gradient of the transverse RMS of a shower along its direction.

    Parameters
    ----------
    points : Sequence[SpacePoint]
        Shower space points
    centre : np.ndarray
        (3) Reference position of the shower axis
    direction : np.ndarray
        (3) Candidate shower direction
    num_segments : int
        Number of segments to split the shower into

    Returns
    -------
    float
        Slope of the segment RMS as a function of the segment index. Returns
        0 if there are fewer than three points or if the gradient is
        undefined.
    """
    if num_segments == 0:
        raise ConfigurationError(
            "Unable to calculate the RMS shower gradient with 0 segments."
        )

    if len(points) < 3:
        return 0.0

    # Get the length of the shower along the axis
    centre = np.asarray(centre, dtype=np.float64)
    direction = np.asarray(direction, dtype=np.float64)
    positions = get_positions(points)
    projs = linalg.projections(positions, centre, direction)
    perm = np.argsort(projs, kind="stable")
    positions, projs = positions[perm], projs[perm]

    length = projs[-1] - projs[0]
    segment_size = length / num_segments
    if segment_size < DBL_EPSILON:
        return 0.0

    # Split the points into segments along the axis
    perps = linalg.perpendiculars(positions, centre, direction, projs)
    segments = round_half_away(projs / segment_size)

    # Compute the RMS of each segment with at least two points
    seg_ids, seg_rms = [], []
    for seg in np.unique(segments):
        value = calculate_rms(perps[segments == seg])
        if value < 0:
            continue

        seg_ids.append(seg)
        seg_rms.append(value)

    return float(
        linear_slope(
            np.asarray(seg_ids, dtype=np.float64), np.asarray(seg_rms, dtype=np.float64)
        )
    )
