"""Module with a data class object which represents an initial track."""

from dataclasses import dataclass

import numpy as np

__all__ = ["Trajectory"]


@dataclass(eq=False)
class Trajectory:
    """Ordered set of trajectory samples along an initial track candidate.

    Attributes
    ----------
    positions : np.ndarray
        (N, 3) Position of each trajectory sample
    directions : np.ndarray
        (N, 3) Direction of the trajectory at each sample
    valid : np.ndarray
        (N) Boolean mask, `False` for samples which carry no usable geometric
        information and must be skipped
    """

    positions: np.ndarray
    directions: np.ndarray
    valid: np.ndarray = None

    def __post_init__(self):
        """Casts the trajectory arrays and checks their consistency."""
        self.positions = np.asarray(self.positions, dtype=np.float64).reshape(-1, 3)
        self.directions = np.asarray(self.directions, dtype=np.float64).reshape(-1, 3)
        if self.valid is None:
            self.valid = np.ones(len(self.positions), dtype=bool)
        else:
            self.valid = np.asarray(self.valid, dtype=bool)

        assert len(self.positions) == len(self.directions) == len(self.valid), (
            "The trajectory positions, directions and flags must have the "
            "same length."
        )

    def __len__(self):
        """Number of trajectory samples (valid or not)."""
        return len(self.positions)

    @property
    def num_points(self):
        """Number of trajectory samples (valid or not).

        Returns
        -------
        int
            Number of samples
        """
        return len(self.positions)

    @property
    def start(self):
        """Location of the first trajectory sample.

        Returns
        -------
        np.ndarray
            (3) Start position of the trajectory
        """
        return self.positions[0]

    def location_at(self, index):
        """Location of a trajectory sample.

        Parameters
        ----------
        index : int
            Index of the sample

        Returns
        -------
        np.ndarray
            (3) Position of the sample
        """
        return self.positions[index]

    def direction_at(self, index):
        """Direction of the trajectory at a sample.

        Parameters
        ----------
        index : int
            Index of the sample

        Returns
        -------
        np.ndarray
            (3) Direction at the sample
        """
        return self.directions[index]

    def closest_point(self, position, max_dist=np.inf):
        """Finds the closest valid trajectory sample to a position.

        Parameters
        ----------
        position : np.ndarray
            (3) Position to match
        max_dist : float, default np.inf
            Samples must be strictly closer than this distance to match

        Returns
        -------
        int
            Index of the closest valid sample, -1 if there is none
        """
        index = np.where(self.valid)[0]
        if not len(index):
            return -1

        dists = np.linalg.norm(self.positions[index] - position, axis=1)
        best = np.argmin(dists)
        if dists[best] >= max_dist:
            return -1

        return int(index[best])
