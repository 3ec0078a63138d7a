"""TPC detector geometry classes."""

from dataclasses import dataclass
from typing import List

import numpy as np

from ember.utils.enums import SignalTypeEnum, enum_factory

from .base import Box

__all__ = ["WirePlane", "TPCChamber"]


@dataclass
class WirePlane:
    """Class which holds all properties of a wire readout plane.

    Attributes
    ----------
    id : int
        Index of the plane within its TPC
    pitch : float
        Distance between two adjacent wires, in cm
    wire_dir : np.ndarray
        (3) Unit vector perpendicular to the wires, pointing towards
        increasing wire indexes
    origin : np.ndarray
        (3) Position of the first wire (wire index 0)
    signal_type : SignalTypeEnum
        Type of signal the plane produces
    view : str
        Name of the plane view (e.g. 'U', 'V', 'Y')
    """

    id: int
    pitch: float
    wire_dir: np.ndarray
    origin: np.ndarray
    signal_type: SignalTypeEnum
    view: str

    def __init__(
        self,
        id,
        pitch,
        wire_dir,
        origin=(0.0, 0.0, 0.0),
        signal_type="induction",
        view="",
    ):
        """Initialize the wire plane.

        Parameters
        ----------
        id : int
            Index of the plane within its TPC
        pitch : float
            Wire pitch in cm
        wire_dir : List[float]
            (3) Direction of increasing wire indexes (normalized here)
        origin : List[float], default (0, 0, 0)
            (3) Position of the wire with index 0
        signal_type : Union[str, SignalTypeEnum], default 'induction'
            Type of signal produced by the plane
        view : str, optional
            Name of the plane view
        """
        assert pitch > 0, "The wire pitch must be strictly positive."
        wire_dir = np.asarray(wire_dir, dtype=np.float64)
        assert np.linalg.norm(wire_dir) > 0, "The wire direction cannot be null."

        self.id = id
        self.pitch = float(pitch)
        self.wire_dir = wire_dir / np.linalg.norm(wire_dir)
        self.origin = np.asarray(origin, dtype=np.float64)
        if isinstance(signal_type, str):
            signal_type = enum_factory("signal", signal_type)
        self.signal_type = SignalTypeEnum(signal_type)
        self.view = view

    def wire_coordinate(self, point: np.ndarray) -> float:
        """Fractional wire index of the wire closest to a point.

        Parameters
        ----------
        point : np.ndarray
            (3) Point coordinates

        Returns
        -------
        float
            Wire coordinate, in units of wire index
        """
        return float(np.dot(point - self.origin, self.wire_dir) / self.pitch)


@dataclass
class TPCChamber(Box):
    """Class which holds all properties of an individual time-projection
    chamber (TPC) and its wire readout planes.

    Attributes
    ----------
    drift_dir : np.ndarray
        (3) Direction in which ionization electrons drift (normalized)
    drift_axis : int
        Axis along which the electrons drift (0, 1 or 2)
    planes : List[WirePlane]
        Wire readout planes of the TPC
    """

    drift_dir: np.ndarray
    drift_axis: int
    planes: List[WirePlane]

    def __init__(self, position, dimensions, drift_dir, planes):
        """Initialize the TPC object.

        Parameters
        ----------
        position : List[float]
            (3) Position of the center of the TPC
        dimensions : List[float]
            (3) Dimension of the TPC
        drift_dir : List[float]
            (3) Drift direction vector
        planes : List[dict]
            Wire plane configurations, in plane index order
        """
        # Initialize the underlying box object
        position = np.asarray(position, dtype=np.float64)
        dimensions = np.asarray(dimensions, dtype=np.float64)
        super().__init__(position - dimensions / 2, position + dimensions / 2)

        # Make sure that the drift axis only points in one direction
        drift_dir = np.asarray(drift_dir, dtype=np.float64)
        nonzero_axes = np.where(drift_dir)[0]
        assert (
            len(nonzero_axes) == 1
        ), "The drift direction must be aligned with a base axis."

        self.drift_dir = drift_dir / np.linalg.norm(drift_dir)
        self.drift_axis = int(nonzero_axes[0])

        # Build the wire planes
        self.planes = [WirePlane(id=i, **cfg) for i, cfg in enumerate(planes)]

    @property
    def num_planes(self):
        """Number of wire planes in the TPC.

        Returns
        -------
        int
            Number of planes
        """
        return len(self.planes)

    @property
    def drift_sign(self):
        """Sign of drift w.r.t. to the drift axis orientation.

        Returns
        -------
        int
            Returns the sign of the drift vector w.r.t. to the drift axis
        """
        return int(np.sign(self.drift_dir[self.drift_axis]))

    @property
    def anode_side(self):
        """Returns whether the anode is on the lower or upper boundary of
        the TPC along the drift axis (0 for lower, 1 for upper).

        Returns
        -------
        int
            Anode side of the TPC
        """
        return (self.drift_sign + 1) // 2

    @property
    def anode_pos(self):
        """Position of the anode along the drift direction.

        Returns
        -------
        float
            Anode position along the drift direction
        """
        return self.boundaries[self.drift_axis, self.anode_side]
