"""Data structures consumed and produced by the reconstruction tools.

- `Hit`: charge pulse measured on one readout wire
- `SpacePoint`: 3D point reconstructed from hits on several planes
- `HitAssociation`: maps space points onto their hits
- `Trajectory`: ordered set of positions/directions of an initial track
- `ElementStore`: typed labeled store used to pass results between tools
"""

from .hit import Hit
from .space_point import HitAssociation, SpacePoint
from .store import Element, ElementStore
from .trajectory import Trajectory
