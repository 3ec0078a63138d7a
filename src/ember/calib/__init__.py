"""Calibration-related corrections and converters.

- `LifetimeCalibrator`: drift electron lifetime correction of hit charges
- Space charge providers (`NoSpaceCharge`, `UniformSpaceCharge`,
  `MapSpaceCharge`) and the `SpaceChargeCorrector` which uses them
- `CalorimetryBase`: interface to the charge-to-energy conversion
"""

from .calorimetry import CalorimetryBase, FunctionCalorimetry
from .factories import sce_factory
from .lifetime import LifetimeCalibrator
from .sce import SpaceChargeCorrector
from .space_charge import (
    MapSpaceCharge,
    NoSpaceCharge,
    SpaceChargeBase,
    UniformSpaceCharge,
)
