"""Module with a general-purpose wire-readout TPC geometry class.

This class supports the storage of:
- TPC boundaries and drift directions
- Wire readout planes (pitch, wire direction, signal type) in each TPC

It also provides the queries needed by the reconstruction: wire pitch and
direction of a plane, wire coordinate of a point and TPC lookup.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from .detector import Box, TPCChamber, WirePlane

__all__ = ["Geometry"]


@dataclass
class Geometry(Box):
    """Handles all geometry functions for a collection of box-shaped TPCs,
    each read out by a set of wire planes.

    The reconstruction assumes that ionization electrons drift along the x
    axis in every TPC.

    Attributes
    ----------
    name : str
        Name of the detector
    tag : str
        Tag or label for the geometry instance
    version : str
        Version number of the geometry
    chambers : List[TPCChamber]
        TPCs of the detector
    """

    name: str
    tag: str
    version: str
    chambers: List[TPCChamber]

    def __init__(
        self,
        name: str,
        tpcs: List[Dict[str, Any]],
        tag: Optional[str] = None,
        version: Optional[str] = None,
    ):
        """Initialize the detector geometry.

        Parameters
        ----------
        name : str
            Name of the detector
        tpcs : List[dict]
            List of TPC configurations (position, dimensions, drift_dir
            and planes), one per TPC
        tag : str, optional
            Tag or label for the geometry instance
        version : str, optional
            Version number of the geometry
        """
        assert len(tpcs), "The geometry must contain at least one TPC."

        self.name = name
        self.tag = tag
        self.version = str(version) if version is not None else None

        # Load the TPCs
        self.chambers = [TPCChamber(**cfg) for cfg in tpcs]
        for chamber in self.chambers:
            assert chamber.drift_axis == 0, "Electrons must drift along the x axis."

        # Initialize the parent Box which spans all TPCs
        lower = np.min(np.vstack([c.lower for c in self.chambers]), axis=0)
        upper = np.max(np.vstack([c.upper for c in self.chambers]), axis=0)
        super().__init__(lower, upper)

    @property
    def num_tpcs(self) -> int:
        """Number of TPCs in the detector.

        Returns
        -------
        int
            Number of TPCs
        """
        return len(self.chambers)

    @property
    def max_planes(self) -> int:
        """Largest number of wire planes in any TPC of the detector.

        Returns
        -------
        int
            Maximum number of planes
        """
        return max(c.num_planes for c in self.chambers)

    def tpc(self, tpc_id: int) -> TPCChamber:
        """Fetch a TPC.

        Parameters
        ----------
        tpc_id : int
            Index of the TPC

        Returns
        -------
        TPCChamber
            TPC object
        """
        return self.chambers[tpc_id]

    def plane(self, tpc_id: int, plane_id: int) -> WirePlane:
        """Fetch a wire plane.

        Parameters
        ----------
        tpc_id : int
            Index of the TPC
        plane_id : int
            Index of the plane within the TPC

        Returns
        -------
        WirePlane
            Wire plane object
        """
        return self.chambers[tpc_id].planes[plane_id]

    def iterate_planes(self):
        """Iterates over the plane indexes found in the detector.

        Returns
        -------
        range
            Plane indexes, from 0 to `max_planes` - 1
        """
        return range(self.max_planes)

    def wire_pitch(self, tpc_id: int, plane_id: int) -> float:
        """Distance between two adjacent wires of a plane.

        Parameters
        ----------
        tpc_id : int
            Index of the TPC
        plane_id : int
            Index of the plane within the TPC

        Returns
        -------
        float
            Wire pitch in cm
        """
        return self.plane(tpc_id, plane_id).pitch

    def wire_direction(self, tpc_id: int, plane_id: int) -> np.ndarray:
        """Direction of increasing wire index of a plane.

        Parameters
        ----------
        tpc_id : int
            Index of the TPC
        plane_id : int
            Index of the plane within the TPC

        Returns
        -------
        np.ndarray
            (3) Unit vector
        """
        return self.plane(tpc_id, plane_id).wire_dir

    def wire_coordinate(self, point: np.ndarray, tpc_id: int, plane_id: int) -> float:
        """Fractional wire index of the wire of a plane closest to a point.

        Parameters
        ----------
        point : np.ndarray
            (3) Point coordinates
        tpc_id : int
            Index of the TPC
        plane_id : int
            Index of the plane within the TPC

        Returns
        -------
        float
            Wire coordinate
        """
        return self.plane(tpc_id, plane_id).wire_coordinate(point)

    def find_tpc(self, point: np.ndarray) -> Optional[int]:
        """Find the TPC which contains a point.

        Parameters
        ----------
        point : np.ndarray
            (3) Point coordinates

        Returns
        -------
        int
            Index of the first TPC containing the point, `None` if the point
            is not in any TPC
        """
        for t, chamber in enumerate(self.chambers):
            if chamber.contains(point):
                return t

        return None
