"""Corrects local track pitches and drift fields for space charge effects."""

import numpy as np

from ember.utils.errors import ConfigurationError

__all__ = ["SpaceChargeCorrector"]


class SpaceChargeCorrector:
    """Applies space charge corrections to quantities measured at positions
    which were themselves already corrected for spatial distortions.
    """

    def __init__(self, provider):
        """Store the space charge provider.

        Parameters
        ----------
        provider : SpaceChargeBase
            Space charge distortion provider
        """
        self.provider = provider

    def check(self, pitch=False, efield=False):
        """Checks that the requested correction modes are available.

        Parameters
        ----------
        pitch : bool, default False
            Whether the pitch (spatial) correction is needed
        efield : bool, default False
            Whether the electric field correction is needed
        """
        provider = self.provider
        if pitch and (provider is None or not provider.enable_cal_spatial_sce):
            raise ConfigurationError(
                "Trying to correct the pitch for space charge effects when "
                "spatial corrections are not enabled in the provider."
            )
        if efield and (provider is None or not provider.enable_sim_efield_sce):
            raise ConfigurationError(
                "Trying to correct the electric field for space charge effects "
                "when field corrections are not enabled in the provider."
            )

    def correct_pitch(self, pitch, pos, direction, tpc_id):
        """Corrects a track pitch for the local spatial distortions.

        The pitch vector is propagated from the uncorrected position of the
        point and the difference between the spatial corrections at both ends
        of the vector is added to it.

        Parameters
        ----------
        pitch : float
            Track pitch computed from corrected positions, in cm
        pos : np.ndarray
            (3) Corrected position of the point
        direction : np.ndarray
            (3) Unit direction of the track at the point
        tpc_id : int
            Index of the TPC the point was measured in

        Returns
        -------
        float
            Corrected track pitch, in cm
        """
        self.check(pitch=True)

        # As the input position is already corrected, find the observed one
        pos = np.asarray(pos, dtype=np.float64)
        direction = np.asarray(direction, dtype=np.float64)
        uncorrected = pos + self.provider.get_pos_offsets(pos, tpc_id)

        # Get the size of the correction at both ends of the pitch vector
        offset = self.provider.get_cal_pos_offsets(uncorrected, tpc_id)
        next_pos = uncorrected + pitch * direction
        next_offset = self.provider.get_cal_pos_offsets(next_pos, tpc_id)

        pitch_vec = pitch * direction + (next_offset - offset)

        return float(np.linalg.norm(pitch_vec))

    def correct_efield(self, efield, pos, tpc_id):
        """Computes the magnitude of the local drift field.

        Parameters
        ----------
        efield : float
            Nominal drift field magnitude, in kV/cm
        pos : np.ndarray
            (3) Corrected position of the point
        tpc_id : int
            Index of the TPC the point was measured in

        Returns
        -------
        float
            Local field magnitude, in kV/cm
        """
        self.check(efield=True)

        # Relative distortion on top of the nominal field, scaled to absolute
        field = self.provider.get_efield_offsets(pos, tpc_id)
        field = (field + self.provider.nominal_efield_dir(tpc_id)) * efield

        return float(np.linalg.norm(field))
