"""Module with fast, Numba-accelerated, compiled math routines.

This includes multiple submodules:
- `base.py` includes basic statistics (RMS, standard deviation, regression)
- `linalg.py` includes linear algebra routines (norms, angles, projections)
"""

# Expose submodules
from . import linalg

# Expose all base functions directly
from .base import *
