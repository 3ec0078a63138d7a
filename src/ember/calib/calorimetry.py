"""Interface to the conversion of a charge per unit length into an energy
deposition per unit length.

The physical calibration (gain, recombination, etc.) lives outside of this
package. A reconstruction tool only needs an object which maps
`(dQ/dx, time, plane, t0, field)` onto a dE/dx value.
"""

from abc import ABC, abstractmethod

__all__ = ["FunctionCalorimetry"]


class CalorimetryBase(ABC):
    """Base class of all calorimetric converters."""

    name = ""

    def __call__(self, dqdx, time, plane, t0=0.0, efield=None):
        """Alias of :meth:`dedx`."""
        return self.dedx(dqdx, time, plane, t0, efield)

    @abstractmethod
    def dedx(self, dqdx, time, plane, t0=0.0, efield=None):
        """Converts a charge per unit length into an energy loss.

        Parameters
        ----------
        dqdx : float
            Charge per unit length, in ADC/cm
        time : float
            Hit peak time, in ticks
        plane : int
            Index of the readout plane
        t0 : float, default 0.
            Interaction time of the particle w.r.t. the trigger
        efield : float, optional
            Local drift field, in kV/cm. Uses the nominal field if not given.

        Returns
        -------
        float
            Energy loss per unit length, in MeV/cm
        """


class FunctionCalorimetry(CalorimetryBase):
    """Wraps a plain function with the calorimetric converter signature."""

    name = "function"

    def __init__(self, function):
        """Store the conversion function.

        Parameters
        ----------
        function : callable
            Function of `(dqdx, time, plane, t0, efield)` returning dE/dx
        """
        assert callable(function), "The calorimetric conversion must be callable."
        self.function = function

    def dedx(self, dqdx, time, plane, t0=0.0, efield=None):
        return self.function(dqdx, time, plane, t0, efield)
