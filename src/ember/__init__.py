"""Top-level module of the EMBER source code."""

from .version import __version__

# Import commonly used data structures and tools
from .data import ElementStore, Hit, HitAssociation, SpacePoint, Trajectory
from .reco import ShowerAlg, TrajPointDEdx
