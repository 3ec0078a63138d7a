"""Module with a data class object which represents a detector hit."""

from dataclasses import dataclass

from ember.utils.enums import SignalTypeEnum

__all__ = ["Hit"]


@dataclass(frozen=True, eq=False)
class Hit:
    """Charge pulse reconstructed on a single readout channel.

    Hits are immutable once produced. Two hits are only ever equal if they are
    the same object: several hits can be fitted on the same readout snippet and
    have identical attributes, yet remain distinct hits.

    Attributes
    ----------
    tpc : int
        Index of the TPC the readout plane belongs to
    plane : int
        Index of the readout plane within its TPC
    wire : int
        Index of the wire within its plane
    start_tick : int
        First sample of the readout snippet the hit was fitted on
    end_tick : int
        Last sample of the readout snippet the hit was fitted on
    peak_time : float
        Time of the hit peak, in ticks
    integral : float
        Integrated charge of the hit, in ADC
    signal_type : SignalTypeEnum
        Type of signal produced by the plane (induction or collection)
    """

    tpc: int
    plane: int
    wire: int
    start_tick: int
    end_tick: int
    peak_time: float
    integral: float
    signal_type: SignalTypeEnum = SignalTypeEnum.COLLECTION

    @property
    def plane_id(self):
        """Unique identifier of the plane the hit was recorded on.

        Returns
        -------
        Tuple[int, int]
            (TPC, plane) pair
        """
        return (self.tpc, self.plane)

    @property
    def snippet(self):
        """Identifier of the readout snippet the hit was fitted on, within
        its plane.

        Returns
        -------
        Tuple[int, int, int]
            (start tick, end tick, wire) triplet
        """
        return (self.start_tick, self.end_tick, self.wire)

    @property
    def is_collection(self):
        """Whether the hit was recorded on a collection plane.

        Returns
        -------
        bool
            `True` if the signal type is collection
        """
        return self.signal_type == SignalTypeEnum.COLLECTION
