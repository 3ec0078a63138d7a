"""Numba JIT compiled implementation of linear algebra routines."""

import numba as nb
import numpy as np

__all__ = ["norm", "unit", "angle", "projections", "perpendiculars"]


@nb.njit(cache=True)
def norm(x: nb.float64[:, :], axis: nb.int32) -> nb.float64[:]:
    """Compute vector norms along specified axis.

    This is a Numba-compiled implementation of `np.linalg.norm(x, axis=axis)`
    for 2D arrays.

    Parameters
    ----------
    x : np.ndarray
        (N, M) array of values
    axis : int
        Axis along which to compute the norm (0 for columns, 1 for rows)

    Returns
    -------
    np.ndarray
        (M) or (N) array of norms
    """
    assert axis == 0 or axis == 1
    xnorm = np.empty(x.shape[1 - axis], dtype=x.dtype)
    if axis == 0:
        for i in range(len(xnorm)):
            xnorm[i] = np.linalg.norm(x[:, i])
    else:
        for i in range(len(xnorm)):
            xnorm[i] = np.linalg.norm(x[i])

    return xnorm


@nb.njit(cache=True)
def unit(v: nb.float64[:]) -> nb.float64[:]:
    """Normalizes a vector. A null vector is returned unchanged.

    Parameters
    ----------
    v : np.ndarray
        (D) vector

    Returns
    -------
    np.ndarray
        (D) unit vector
    """
    mag = np.linalg.norm(v)
    if mag == 0.0:
        return v.copy()

    return v / mag


@nb.njit(cache=True)
def angle(u: nb.float64[:], v: nb.float64[:]) -> nb.float64:
    """Angle between two vectors, in radians.

    If either vector is null the angle is undefined and NaN is returned.

    Parameters
    ----------
    u : np.ndarray
        (3) first vector
    v : np.ndarray
        (3) second vector

    Returns
    -------
    float
        Angle in [0, pi]
    """
    mag2 = np.dot(u, u) * np.dot(v, v)
    if mag2 <= 0.0:
        return np.nan

    arg = np.dot(u, v) / np.sqrt(mag2)

    return np.arccos(min(max(arg, -1.0), 1.0))


@nb.njit(cache=True)
def projections(
    points: nb.float64[:, :], start: nb.float64[:], direction: nb.float64[:]
) -> nb.float64[:]:
    """Signed projection of each point along a direction, from a start point.

    Parameters
    ----------
    points : np.ndarray
        (N, D) point coordinates
    start : np.ndarray
        (D) start point of the projection axis
    direction : np.ndarray
        (D) direction of the projection axis

    Returns
    -------
    np.ndarray
        (N) projections
    """
    res = np.empty(len(points), dtype=points.dtype)
    for i in range(len(points)):
        res[i] = np.dot(points[i] - start, direction)

    return res


@nb.njit(cache=True)
def perpendiculars(
    points: nb.float64[:, :],
    start: nb.float64[:],
    direction: nb.float64[:],
    projs: nb.float64[:],
) -> nb.float64[:]:
    """Distance of each point from an axis, given its projection on it.

    Parameters
    ----------
    points : np.ndarray
        (N, D) point coordinates
    start : np.ndarray
        (D) start point of the axis
    direction : np.ndarray
        (D) direction of the axis
    projs : np.ndarray
        (N) projection of each point along the axis

    Returns
    -------
    np.ndarray
        (N) perpendicular distances
    """
    res = np.empty(len(points), dtype=points.dtype)
    for i in range(len(points)):
        res[i] = np.linalg.norm(points[i] - start - projs[i] * direction)

    return res
