"""Apply electron lifetime corrections."""

import numpy as np

from ember.utils.globals import MS_TO_US, NS_TO_US

__all__ = ["LifetimeCalibrator"]


class LifetimeCalibrator:
    """Applies a correction based on drift electron lifetime and the time
    at which a hit was recorded.

    The charge of a hit recorded at time `t` (in ticks) is scaled by
    `exp(t_drift / lifetime)`, with the drift time derived from the sampling
    rate (in ns per tick) and the lifetime given in ms.
    """

    name = "lifetime"

    def __init__(self, num_tpcs, lifetime, sampling_rate):
        """Load the information needed to make a lifetime correction.

        Parameters
        ----------
        num_tpcs : int
            Number of TPCs in the detector
        lifetime : Union[float, list]
            Specifies the electron lifetime in ms. If `list`, it should map
            a TPC ID onto a specific value.
        sampling_rate : float
            Time between two readout samples, in ns
        """
        self.lifetime = self.get_quantity(lifetime, num_tpcs)
        self.sampling_rate = sampling_rate

        assert np.all(self.lifetime > 0), "Electron lifetimes must be positive."

    @classmethod
    def from_detprop(cls, detprop, num_tpcs):
        """Builds the calibrator from the detector properties.

        Parameters
        ----------
        detprop : DetectorProperties
            Detector properties (lifetime and sampling rate)
        num_tpcs : int
            Number of TPCs in the detector

        Returns
        -------
        LifetimeCalibrator
            Lifetime calibrator with a uniform lifetime
        """
        return cls(num_tpcs, detprop.electron_lifetime, detprop.sampling_rate)

    @staticmethod
    def get_quantity(value, num_tpcs):
        """Process quantity weather it is provided as a scalar or a list.

        Parameters
        ----------
        value : Union[float, list]
            Specifies the quantity value as a scalar or a list
        num_tpcs : int
            Number of TPCs in the detector

        Returns
        -------
        np.ndarray
             List of quantities, one per TPC
        """
        if np.isscalar(value):
            return np.full(num_tpcs, value, dtype=np.float64)

        assert len(value) == num_tpcs, (
            "`lifetime` must be specified as either a scalar or as a list "
            f"with one value per TPC ({num_tpcs})."
        )

        return np.asarray(value, dtype=np.float64)

    def correction(self, times, tpc_id):
        """Correction factors to apply to charges recorded at given times.

        Parameters
        ----------
        times : Union[float, np.ndarray]
            Hit peak time(s), in ticks
        tpc_id : int
            ID of the TPC to use

        Returns
        -------
        Union[float, np.ndarray]
            Multiplicative correction factor(s)
        """
        drift_time = self.sampling_rate * NS_TO_US * np.asarray(times)

        return np.exp(drift_time / (self.lifetime[tpc_id] * MS_TO_US))

    def process(self, times, values, tpc_id):
        """Apply the lifetime correction.

        Parameters
        ----------
        times : np.ndarray
            (N) array of hit peak times, in ticks
        values : np.ndarray
            (N) array of charges associated with each hit
        tpc_id : int
            ID of the TPC to use

        Returns
        -------
        np.ndarray
            (N) array of corrected values
        """
        return self.correction(times, tpc_id) * values

    def process_hit(self, hit):
        """Lifetime-corrected charge integral of a single hit.

        Parameters
        ----------
        hit : Hit
            Hit to correct

        Returns
        -------
        float
            Corrected charge
        """
        return float(hit.integral * self.correction(hit.peak_time, hit.tpc))
