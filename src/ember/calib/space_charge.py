"""Space charge distortion providers.

A provider describes the spatial and electric field distortions induced by
the accumulation of slow positive ions in the drift volume. It exposes:
- whether spatial corrections (`enable_cal_spatial_sce`) and electric field
  corrections (`enable_sim_efield_sce`) are available;
- the spatial offset from a true position to the observed position
  (`get_pos_offsets`);
- the spatial offset from an observed position to the true position
  (`get_cal_pos_offsets`);
- the relative electric field distortion at a position
  (`get_efield_offsets`);
- the nominal direction of the drift field in a TPC (`nominal_efield_dir`).
"""

from abc import ABC, abstractmethod

import numpy as np
from scipy.interpolate import RegularGridInterpolator

__all__ = ["NoSpaceCharge", "UniformSpaceCharge", "MapSpaceCharge"]


class SpaceChargeBase(ABC):
    """Base class of all space charge providers."""

    name = ""

    def __init__(
        self, efield_dirs=None, enable_cal_spatial=False, enable_efield=False
    ):
        """Store the basic provider configuration.

        Parameters
        ----------
        efield_dirs : np.ndarray, optional
            (N_t, 3) Nominal drift field direction in each TPC. If not
            specified, the field is assumed to point along +x everywhere.
        enable_cal_spatial : bool, default False
            Whether spatial corrections are available
        enable_efield : bool, default False
            Whether electric field corrections are available
        """
        if efield_dirs is None:
            efield_dirs = [[1.0, 0.0, 0.0]]
        self.efield_dirs = np.asarray(efield_dirs, dtype=np.float64).reshape(-1, 3)
        self._enable_cal_spatial = enable_cal_spatial
        self._enable_efield = enable_efield

    @property
    def enable_cal_spatial_sce(self):
        """Whether the provider can correct spatial distortions.

        Returns
        -------
        bool
            `True` if spatial corrections are enabled
        """
        return self._enable_cal_spatial

    @property
    def enable_sim_efield_sce(self):
        """Whether the provider can correct electric field distortions.

        Returns
        -------
        bool
            `True` if electric field corrections are enabled
        """
        return self._enable_efield

    def nominal_efield_dir(self, tpc_id):
        """Nominal direction of the drift field in a TPC.

        Parameters
        ----------
        tpc_id : int
            Index of the TPC

        Returns
        -------
        np.ndarray
            (3) Unit vector
        """
        if len(self.efield_dirs) == 1:
            return self.efield_dirs[0]

        return self.efield_dirs[tpc_id]

    @abstractmethod
    def get_pos_offsets(self, pos, tpc_id):
        """Offset from a true position to its distorted (observed) position.

        Parameters
        ----------
        pos : np.ndarray
            (3) Position
        tpc_id : int
            Index of the TPC

        Returns
        -------
        np.ndarray
            (3) Offset vector in cm
        """

    @abstractmethod
    def get_cal_pos_offsets(self, pos, tpc_id):
        """Offset from an observed position to its corrected (true) position.

        Parameters
        ----------
        pos : np.ndarray
            (3) Position
        tpc_id : int
            Index of the TPC

        Returns
        -------
        np.ndarray
            (3) Offset vector in cm
        """

    @abstractmethod
    def get_efield_offsets(self, pos, tpc_id):
        """Relative electric field distortion at a position.

        Parameters
        ----------
        pos : np.ndarray
            (3) Position
        tpc_id : int
            Index of the TPC

        Returns
        -------
        np.ndarray
            (3) Field distortion, relative to the nominal field magnitude
        """


class NoSpaceCharge(SpaceChargeBase):
    """Provider for a detector without space charge effects.

    Both correction modes are disabled: requesting a correction from this
    provider is a configuration error.
    """

    name = "none"

    def __init__(self, efield_dirs=None):
        """Initialize the provider.

        Parameters
        ----------
        efield_dirs : np.ndarray, optional
            (N_t, 3) Nominal drift field direction in each TPC
        """
        super().__init__(efield_dirs)

    def get_pos_offsets(self, pos, tpc_id):
        return np.zeros(3)

    def get_cal_pos_offsets(self, pos, tpc_id):
        return np.zeros(3)

    def get_efield_offsets(self, pos, tpc_id):
        return np.zeros(3)


class UniformSpaceCharge(SpaceChargeBase):
    """Provider with distortions which do not depend on the position."""

    name = "uniform"

    def __init__(
        self,
        pos_offset=(0.0, 0.0, 0.0),
        cal_pos_offset=None,
        efield_offset=(0.0, 0.0, 0.0),
        efield_dirs=None,
        enable_cal_spatial=True,
        enable_efield=True,
    ):
        """Store the uniform distortions.

        Parameters
        ----------
        pos_offset : List[float], default (0, 0, 0)
            (3) Offset from true to observed positions, in cm
        cal_pos_offset : List[float], optional
            (3) Offset from observed to true positions, in cm. If not
            specified, it is the opposite of `pos_offset`.
        efield_offset : List[float], default (0, 0, 0)
            (3) Relative electric field distortion
        efield_dirs : np.ndarray, optional
            (N_t, 3) Nominal drift field direction in each TPC
        enable_cal_spatial : bool, default True
            Whether spatial corrections are available
        enable_efield : bool, default True
            Whether electric field corrections are available
        """
        super().__init__(efield_dirs, enable_cal_spatial, enable_efield)

        self.pos_offset = np.asarray(pos_offset, dtype=np.float64)
        if cal_pos_offset is None:
            self.cal_pos_offset = -self.pos_offset
        else:
            self.cal_pos_offset = np.asarray(cal_pos_offset, dtype=np.float64)
        self.efield_offset = np.asarray(efield_offset, dtype=np.float64)

    def get_pos_offsets(self, pos, tpc_id):
        return self.pos_offset.copy()

    def get_cal_pos_offsets(self, pos, tpc_id):
        return self.cal_pos_offset.copy()

    def get_efield_offsets(self, pos, tpc_id):
        return self.efield_offset.copy()


class MapSpaceCharge(SpaceChargeBase):
    """Provider which interpolates distortions tabulated on a regular grid.

    The maps are either provided directly or loaded from a `.npz` file with
    the following arrays:
    - `x`, `y`, `z`: (N_x), (N_y), (N_z) grid node coordinates;
    - `pos_offsets`: (N_x, N_y, N_z, 3) true-to-observed offsets;
    - `cal_pos_offsets` (optional): (N_x, N_y, N_z, 3) observed-to-true
      offsets, defaults to the opposite of `pos_offsets`;
    - `efield_offsets` (optional): (N_x, N_y, N_z, 3) relative field
      distortions, defaults to zero.

    Positions outside of the grid are brought back to its closest edge.
    """

    name = "map"

    def __init__(
        self,
        path=None,
        x=None,
        y=None,
        z=None,
        pos_offsets=None,
        cal_pos_offsets=None,
        efield_offsets=None,
        efield_dirs=None,
        enable_cal_spatial=True,
        enable_efield=True,
    ):
        """Load the distortion maps and build their interpolators.

        Parameters
        ----------
        path : str, optional
            Path to a `.npz` file containing the maps
        x, y, z : np.ndarray, optional
            Grid node coordinates along each axis
        pos_offsets : np.ndarray, optional
            (N_x, N_y, N_z, 3) true-to-observed offsets
        cal_pos_offsets : np.ndarray, optional
            (N_x, N_y, N_z, 3) observed-to-true offsets
        efield_offsets : np.ndarray, optional
            (N_x, N_y, N_z, 3) relative field distortions
        efield_dirs : np.ndarray, optional
            (N_t, 3) Nominal drift field direction in each TPC
        enable_cal_spatial : bool, default True
            Whether spatial corrections are available
        enable_efield : bool, default True
            Whether electric field corrections are available
        """
        super().__init__(efield_dirs, enable_cal_spatial, enable_efield)

        # Load the maps from file, if requested
        assert (path is None) ^ (pos_offsets is None), (
            "Must provide either the distortion maps directly or point to "
            "a `.npz` file through `path`, not both."
        )
        if path is not None:
            with np.load(path) as maps:
                x, y, z = maps["x"], maps["y"], maps["z"]
                pos_offsets = maps["pos_offsets"]
                if "cal_pos_offsets" in maps:
                    cal_pos_offsets = maps["cal_pos_offsets"]
                if "efield_offsets" in maps:
                    efield_offsets = maps["efield_offsets"]

        # Check the consistency of the maps
        grid = tuple(np.asarray(a, dtype=np.float64) for a in (x, y, z))
        shape = tuple(len(a) for a in grid) + (3,)
        pos_offsets = np.asarray(pos_offsets, dtype=np.float64)
        if cal_pos_offsets is None:
            cal_pos_offsets = -pos_offsets
        if efield_offsets is None:
            efield_offsets = np.zeros(shape)

        self.lower = np.array([a[0] for a in grid])
        self.upper = np.array([a[-1] for a in grid])
        self._interp = {}
        for key, values in (
            ("pos", pos_offsets),
            ("cal_pos", cal_pos_offsets),
            ("efield", efield_offsets),
        ):
            values = np.asarray(values, dtype=np.float64)
            assert values.shape == shape, (
                f"The `{key}_offsets` map has shape {values.shape}, "
                f"expected {shape} from the grid."
            )
            self._interp[key] = RegularGridInterpolator(grid, values)

    def _evaluate(self, key, pos):
        """Interpolate one of the maps at a position."""
        pos = np.clip(np.asarray(pos, dtype=np.float64), self.lower, self.upper)

        return self._interp[key](pos[None, :])[0]

    def get_pos_offsets(self, pos, tpc_id):
        return self._evaluate("pos", pos)

    def get_cal_pos_offsets(self, pos, tpc_id):
        return self._evaluate("cal_pos", pos)

    def get_efield_offsets(self, pos, tpc_id):
        return self._evaluate("efield", pos)
