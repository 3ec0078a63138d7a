"""Defines constants shared across the EMBER package."""

import numpy as np

# Value assigned to a per-plane dE/dx estimate when the plane has no value
INVALID_DEDX = -999.0

# Above this dE/dx cut value (MeV/cm), the sequence trimming is disabled
DEDX_CUT_DISABLE = 10.0

# Range of dE/dx values (MeV/cm) considered physical when averaging
DEDX_MEAN_RANGE = (0.0, 10.0)

# Minimum number of dE/dx values needed to attempt a sequence trimming
DEDX_TRIM_MIN_SIZE = 4

# Number of values used to vote on the expected side of the dE/dx cut
DEDX_VOTE_SIZE = 3

# Number of standard deviations used to trim per-point hit charges
CHARGE_TRIM_NSIGMA = 2.0

# Numerical precision thresholds
DBL_EPSILON = float(np.finfo(np.float64).eps)
FLT_EPSILON = float(np.finfo(np.float32).eps)

# Conversion factor from milliseconds to microseconds
MS_TO_US = 1e3

# Conversion factor from nanoseconds to microseconds
NS_TO_US = 1e-3
