"""Detector running conditions needed to interpret hit times and charges."""

from dataclasses import dataclass

import numpy as np

from ember.utils.globals import NS_TO_US

from .detector import TPCChamber

__all__ = ["DetectorProperties"]


@dataclass
class DetectorProperties:
    """Electronics and drift properties of the detector.

    Attributes
    ----------
    sampling_rate : float
        Time between two readout samples (ticks), in ns
    electron_lifetime : float
        Drift electron lifetime, in ms
    efield : float
        Nominal drift electric field, in kV/cm
    drift_velocity : float
        Drift velocity of ionization electrons, in cm/us
    trigger_offset : float
        Tick at which the trigger happens (zero drift time)
    """

    sampling_rate: float = 500.0
    electron_lifetime: float = 3.0
    efield: float = 0.5
    drift_velocity: float = 0.16
    trigger_offset: float = 0.0

    def __post_init__(self):
        """Checks the sanity of the detector properties."""
        assert self.sampling_rate > 0, "The sampling rate must be positive."
        assert self.electron_lifetime > 0, "The electron lifetime must be positive."
        assert self.drift_velocity > 0, "The drift velocity must be positive."

    @property
    def tick_period(self):
        """Time between two readout samples in us.

        Returns
        -------
        float
            Tick period in us
        """
        return self.sampling_rate * NS_TO_US

    def convert_ticks_to_x(self, ticks: float, chamber: TPCChamber) -> float:
        """Converts a hit time into a drift coordinate.

        Parameters
        ----------
        ticks : float
            Hit time in ticks
        chamber : TPCChamber
            TPC in which the hit was recorded

        Returns
        -------
        float
            Position along the drift axis, in cm
        """
        drift = (ticks - self.trigger_offset) * self.tick_period * self.drift_velocity

        return float(chamber.anode_pos - chamber.drift_sign * drift)

    def drift_time(self, distance: float) -> float:
        """Time needed for ionization electrons to drift over a distance.

        Parameters
        ----------
        distance : float
            Drift distance in cm

        Returns
        -------
        float
            Drift time in us
        """
        return float(np.abs(distance) / self.drift_velocity)
