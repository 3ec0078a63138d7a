"""Projection and ordering of shower hits and space points.

All orderings are explicit stable sorts: objects which share the same sorting
key keep their input order and none of them is ever dropped.
"""

from typing import List, Optional, Sequence

import numpy as np

from ember.data import Hit, SpacePoint
from ember.math import linalg

__all__ = [
    "get_positions",
    "space_point_projection",
    "space_point_perpendicular",
    "distance_between_space_points",
    "hit_coordinates",
    "order_shower_hits",
    "order_space_points",
    "order_space_points_perpendicular",
]


def get_positions(points: Sequence[SpacePoint]) -> np.ndarray:
    """Stacks the positions of a set of space points.

    Parameters
    ----------
    points : Sequence[Union[SpacePoint, np.ndarray]]
        Space points (or raw positions)

    Returns
    -------
    np.ndarray
        (N, 3) Positions
    """
    if not len(points):
        return np.empty((0, 3), dtype=np.float64)

    return np.vstack([_position(p) for p in points]).astype(np.float64)


def space_point_projection(point, start, direction) -> float:
    """Signed distance of a space point along a direction from a start point.

    Parameters
    ----------
    point : Union[SpacePoint, np.ndarray]
        Space point (or raw position)
    start : np.ndarray
        (3) Start point of the projection axis
    direction : np.ndarray
        (3) Unit direction of the projection axis

    Returns
    -------
    float
        Projected length
    """
    return float(np.dot(_position(point) - start, direction))


def space_point_perpendicular(point, start, direction, proj=None) -> float:
    """Distance of a space point from the axis defined by a start point and a
    direction.

    Parameters
    ----------
    point : Union[SpacePoint, np.ndarray]
        Space point (or raw position)
    start : np.ndarray
        (3) Start point of the axis
    direction : np.ndarray
        (3) Unit direction of the axis
    proj : float, optional
        Projection of the point along the axis, computed if not provided

    Returns
    -------
    float
        Perpendicular distance
    """
    if proj is None:
        proj = space_point_projection(point, start, direction)

    diff = _position(point) - start - proj * np.asarray(direction)

    return float(np.linalg.norm(diff))


def distance_between_space_points(point_a, point_b) -> float:
    """Euclidean distance between two space points.

    Parameters
    ----------
    point_a : Union[SpacePoint, np.ndarray]
        First space point
    point_b : Union[SpacePoint, np.ndarray]
        Second space point

    Returns
    -------
    float
        Distance in cm
    """
    return float(np.linalg.norm(_position(point_a) - _position(point_b)))


def hit_coordinates(hit: Hit, geo, detprop) -> np.ndarray:
    """Coordinates of a hit in the 2D system of its plane.

    The first coordinate is the distance along the direction of increasing
    wire index, the second is the drift coordinate.

    Parameters
    ----------
    hit : Hit
        Hit to get the coordinates of
    geo : Geometry
        Detector geometry
    detprop : DetectorProperties
        Detector properties used to convert ticks to positions

    Returns
    -------
    np.ndarray
        (2) Hit coordinates in cm
    """
    pitch = geo.wire_pitch(hit.tpc, hit.plane)
    x = detprop.convert_ticks_to_x(hit.peak_time, geo.tpc(hit.tpc))

    return np.array([hit.wire * pitch, x])


def order_shower_hits(
    hits: Sequence[Hit], start, direction, geo, detprop
) -> List[Hit]:
    """Orders the hits of a plane w.r.t. their projected length onto the
    shower direction from the shower start position.

    This is done in the 2D coordinate system of the plane of the first hit
    (wire direction, drift coordinate). The input is expected to contain hits
    from a single plane: the ordering stops at the first hit which belongs to
    another plane.

    The projected direction can disagree in sign with the natural ordering of
    the hits. If the last hit projects closer to the start than the first
    one, the order is reversed.

    Parameters
    ----------
    hits : Sequence[Hit]
        Non-empty set of hits from one plane
    start : np.ndarray
        (3) Shower start position
    direction : np.ndarray
        (3) Shower direction
    geo : Geometry
        Detector geometry
    detprop : DetectorProperties
        Detector properties

    Returns
    -------
    List[Hit]
        Ordered hits
    """
    if not len(hits):
        raise ValueError("Cannot order an empty set of shower hits.")

    # Get the 2D start position and direction in the plane of the first hit
    first = hits[0]
    plane = geo.plane(first.tpc, first.plane)
    start = np.asarray(start, dtype=np.float64)
    direction = np.asarray(direction, dtype=np.float64)
    start_2d = np.array([plane.wire_coordinate(start) * plane.pitch, start[0]])
    dir_2d = linalg.unit(np.array([np.dot(direction, plane.wire_dir), direction[0]]))

    # Restrict to the hits of the first plane
    selected = []
    for hit in hits:
        if hit.plane_id != first.plane_id:
            break
        selected.append(hit)

    # Order the hits based on their projection
    coords = np.vstack([hit_coordinates(h, geo, detprop) for h in selected])
    projs = np.dot(coords - start_2d, dir_2d)
    perm = np.argsort(projs, kind="stable")

    # Correct for the orientation, equal projections keep their input order
    if abs(projs[perm[-1]]) < abs(projs[perm[0]]):
        perm = np.argsort(-projs, kind="stable")

    return [selected[i] for i in perm]


def order_space_points(
    points: Sequence[SpacePoint], start, direction: Optional[np.ndarray] = None
) -> List[SpacePoint]:
    """Orders space points w.r.t. their projected length along a direction
    from a start position or, if no direction is given, w.r.t. their distance
    from the start position.

    Parameters
    ----------
    points : Sequence[SpacePoint]
        Space points to order
    start : np.ndarray
        (3) Reference position
    direction : np.ndarray, optional
        (3) Direction along which to project the points

    Returns
    -------
    List[SpacePoint]
        Ordered space points
    """
    if not len(points):
        return list(points)

    start = np.asarray(start, dtype=np.float64)
    positions = get_positions(points)
    if direction is not None:
        direction = np.asarray(direction, dtype=np.float64)
        keys = linalg.projections(positions, start, direction)
    else:
        keys = linalg.norm(positions - start, 1)

    return [points[i] for i in np.argsort(keys, kind="stable")]


def order_space_points_perpendicular(
    points: Sequence[SpacePoint], start, direction
) -> List[SpacePoint]:
    """Orders space points w.r.t. their perpendicular distance from the axis
    defined by a start position and a direction.

    Parameters
    ----------
    points : Sequence[SpacePoint]
        Space points to order
    start : np.ndarray
        (3) Start position of the axis
    direction : np.ndarray
        (3) Direction of the axis

    Returns
    -------
    List[SpacePoint]
        Ordered space points
    """
    if not len(points):
        return list(points)

    start = np.asarray(start, dtype=np.float64)
    direction = np.asarray(direction, dtype=np.float64)
    positions = get_positions(points)
    projs = linalg.projections(positions, start, direction)
    perps = linalg.perpendiculars(positions, start, direction, projs)

    return [points[i] for i in np.argsort(perps, kind="stable")]


def _position(point):
    """Position of a space point, or the point itself if it is a raw array."""
    if isinstance(point, SpacePoint):
        return point.position

    return np.asarray(point, dtype=np.float64)
