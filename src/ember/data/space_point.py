"""Module with the space point data class and its association to hits."""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np

from .hit import Hit

__all__ = ["SpacePoint", "HitAssociation"]


@dataclass(eq=False)
class SpacePoint:
    """3D point reconstructed from correlated hits across readout planes.

    Attributes
    ----------
    id : int
        Index of the space point in the event
    position : np.ndarray
        (3) Position of the space point in cm
    """

    id: int
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        """Casts the position to a float array."""
        self.position = np.asarray(self.position, dtype=np.float64)
        assert self.position.shape == (3,), "A space point position must be 3D."


class HitAssociation:
    """Finds the hits associated with a space point.

    The association does not own the space points nor the hits. A space point
    with no associated hit is mapped onto an empty list, which signals an
    upstream inconsistency the caller must handle.
    """

    def __init__(self, hits: Dict[int, Sequence[Hit]] = None):
        """Store the association.

        Parameters
        ----------
        hits : Dict[int, Sequence[Hit]], optional
            Maps each space point ID onto the list of its hits
        """
        self._hits = {k: list(v) for k, v in (hits or {}).items()}

    def __call__(self, space_point: SpacePoint) -> List[Hit]:
        """Returns the hits associated with a space point.

        Parameters
        ----------
        space_point : SpacePoint
            Space point to get the hits of

        Returns
        -------
        List[Hit]
            Associated hits, possibly empty
        """
        return self._hits.get(space_point.id, [])

    def __len__(self):
        """Number of space points with an association entry."""
        return len(self._hits)

    def add(self, space_point: SpacePoint, hits: Sequence[Hit]):
        """Associate a list of hits to a space point.

        Parameters
        ----------
        space_point : SpacePoint
            Space point to associate the hits with
        hits : Sequence[Hit]
            Hits to associate
        """
        self._hits.setdefault(space_point.id, []).extend(hits)
