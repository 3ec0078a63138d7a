"""Detector components which make up a wire-readout TPC geometry."""

from .base import Box
from .tpc import TPCChamber, WirePlane
