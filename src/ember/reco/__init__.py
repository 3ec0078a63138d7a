"""Shower reconstruction tools.

- `ordering`: projections, distances and orderings of hits and space points
- `charge`: charge-weighted and geometric shower centres
- `direction`: transverse spread gradient used to validate a direction
- `snippets`: grouping of hits fitted on the same readout snippet
- `dedx`: initial track dE/dx estimation
- `alg`: shared algorithm object bundling the helpers above
"""

from .alg import ShowerAlg
from .charge import ChargeCentroidEstimator, geometric_centre
from .dedx import DEdxResult, TrajPointDEdx, find_dedx_length
from .direction import calculate_rms, rms_shower_gradient
from .ordering import (
    distance_between_space_points,
    get_positions,
    hit_coordinates,
    order_shower_hits,
    order_space_points,
    order_space_points_perpendicular,
    space_point_perpendicular,
    space_point_projection,
)
from .snippets import organize_hits
