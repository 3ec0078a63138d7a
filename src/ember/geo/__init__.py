"""Detector geometry and running conditions.

- `Geometry`: TPC volumes and their wire readout planes
- `DetectorProperties`: sampling, drift and field properties
- `geo_factory`: load a geometry from its YAML description
"""

from .base import Geometry
from .factories import detprop_factory, geo_factory
from .properties import DetectorProperties
