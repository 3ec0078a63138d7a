"""Numba JIT compiled implementation of basic statistical functions."""

import numba as nb
import numpy as np

from ember.utils.globals import FLT_EPSILON

__all__ = ["rms", "sample_std", "round_half_away", "linear_slope"]


@nb.njit(cache=True)
def rms(x: nb.float64[:]) -> nb.float64:
    """Root mean square of a set of residuals w.r.t. zero, using the
    unbiased (n - 1) denominator.

    Parameters
    ----------
    x : np.ndarray
        (N) array of residuals, N >= 2

    Returns
    -------
    float
        RMS of the residuals
    """
    assert len(x) > 1, "Need at least two values to compute an unbiased RMS."

    return np.sqrt(np.sum(x * x) / (len(x) - 1))


@nb.njit(cache=True)
def sample_std(x: nb.float64[:]) -> nb.float64:
    """Unbiased sample standard deviation of a set of values.

    Parameters
    ----------
    x : np.ndarray
        (N) array of values, N >= 2

    Returns
    -------
    float
        Standard deviation, using the (n - 1) denominator
    """
    assert len(x) > 1, "Need at least two values to compute a standard deviation."

    diff = x - np.mean(x)

    return np.sqrt(np.sum(diff * diff) / (len(x) - 1))


@nb.njit(cache=True)
def round_half_away(x: nb.float64[:]) -> nb.int64[:]:
    """Rounds values to the nearest integer, with halfway cases rounded away
    from zero (unlike `np.round` which rounds them to the nearest even value).

    Parameters
    ----------
    x : np.ndarray
        (N) array of values

    Returns
    -------
    np.ndarray
        (N) array of rounded integers
    """
    res = np.empty(len(x), dtype=np.int64)
    for i in range(len(x)):
        res[i] = int(np.sign(x[i]) * np.floor(np.abs(x[i]) + 0.5))

    return res


@nb.njit(cache=True)
def linear_slope(x: nb.float64[:], y: nb.float64[:]) -> nb.float64:
    """Slope of the ordinary least-squares line fitted through (x, y).

    Parameters
    ----------
    x : np.ndarray
        (N) array of abscissa values
    y : np.ndarray
        (N) array of ordinate values

    Returns
    -------
    float
        Slope of the regression line. If the regression is degenerate (fewer
        than two distinct abscissa values), returns 0.
    """
    n = len(x)
    sumx, sumy, sumx2, sumxy = 0.0, 0.0, 0.0, 0.0
    for i in range(n):
        sumx += x[i]
        sumy += y[i]
        sumx2 += x[i] * x[i]
        sumxy += x[i] * y[i]

    denom = n * sumx2 - sumx * sumx
    if abs(denom) < FLT_EPSILON:
        return 0.0

    return (n * sumxy - sumx * sumy) / denom
