"""Volume primitives shared by the detector components."""

from dataclasses import dataclass

import numpy as np

__all__ = ["Box"]


@dataclass
class Box:
    """Axis-aligned box-shaped volume (a TPC or the whole detector).

    Attributes
    ----------
    boundaries : np.ndarray
        (3, 2) Lower and upper bound of the box along each axis
    """

    boundaries: np.ndarray

    def __init__(self, lower: np.ndarray, upper: np.ndarray):
        """Build the box from its two opposite corners.

        Parameters
        ----------
        lower : np.ndarray
            (3) Corner with the smallest coordinates
        upper : np.ndarray
            (3) Corner with the largest coordinates
        """
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        assert np.all(upper >= lower), "The upper corner must lie above the lower one."

        self.boundaries = np.stack((lower, upper), axis=1)

    @property
    def lower(self) -> np.ndarray:
        """(3) Corner of the box with the smallest coordinates."""
        return self.boundaries[:, 0]

    @property
    def upper(self) -> np.ndarray:
        """(3) Corner of the box with the largest coordinates."""
        return self.boundaries[:, 1]

    @property
    def center(self) -> np.ndarray:
        """(3) Center of the box."""
        return self.boundaries.mean(axis=1)

    @property
    def dimensions(self) -> np.ndarray:
        """(3) Length of the box along each axis."""
        return self.upper - self.lower

    def contains(self, point: np.ndarray) -> bool:
        """Checks whether a point is inside the box, walls included.

        Parameters
        ----------
        point : np.ndarray
            (3) Point coordinates

        Returns
        -------
        bool
            `True` if the point is in the box
        """
        point = np.asarray(point)

        return bool(np.all((point >= self.lower) & (point <= self.upper)))
