"""Energy loss (dE/dx) of the initial track of a shower.

The dE/dx is measured hit by hit along the initial track (trunk) of the
shower, before it develops. Each space point of the trunk is matched to the
closest point of the initial track trajectory, which provides the local
direction used to compute the 3D pitch seen by the wire that recorded the
hit. The per-hit dE/dx values are accumulated per plane, trimmed to remove the
part of the trunk affected by pair production and summarized as a median or a
mean.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from ember.calib import SpaceChargeCorrector, sce_factory
from ember.data import ElementStore, Hit, SpacePoint, Trajectory
from ember.geo import detprop_factory, geo_factory
from ember.math import linalg
from ember.utils.config import parse_config
from ember.utils.enums import StatusEnum
from ember.utils.errors import ConfigurationError
from ember.utils.globals import (
    DEDX_CUT_DISABLE,
    DEDX_MEAN_RANGE,
    DEDX_TRIM_MIN_SIZE,
    DEDX_VOTE_SIZE,
    INVALID_DEDX,
)
from ember.utils.logger import logger

from .snippets import organize_hits

__all__ = ["DEdxResult", "TrajPointDEdx", "find_dedx_length"]


def find_dedx_length(values: Sequence[float], cut: float) -> List[float]:
    """Trims a sequence of dE/dx values ordered along a shower trunk at the
    point where the energy loss jumps across a cut value.

    The dE/dx of an electron is flat as a function of its energy above
    ~10 MeV. A sudden jump in the sequence indicates that the particle has
    split (pair production) or is coming to its end.

    The first three values vote on whether the sequence is expected to lie
    above the cut (if at least two of them do) or below it. They are always
    kept. The rest of the sequence (starting again from the third value) is
    kept as long as the values are on the expected side of the cut. A value
    on the wrong side is skipped as a Landau fluctuation if either of the two
    next values lies above the cut, otherwise the sequence stops there.

    Parameters
    ----------
    values : Sequence[float]
        Ordered dE/dx values
    cut : float
        dE/dx cut value. If it is above 10, no trimming is applied.

    Returns
    -------
    List[float]
        Trimmed dE/dx values
    """
    values = list(values)
    if cut > DEDX_CUT_DISABLE or len(values) < DEDX_TRIM_MIN_SIZE:
        return values

    # See if the sequence lives above or below the cut
    upper_bound = sum(v > cut for v in values[:DEDX_VOTE_SIZE]) > 1

    kept = values[:DEDX_VOTE_SIZE]
    num_values = len(values)
    for i in range(DEDX_VOTE_SIZE - 1, num_values):
        value = values[i]
        if (upper_bound and value > cut) or (not upper_bound and value < cut):
            kept.append(value)
            continue

        # Maybe it is a Landau fluctuation, give it two more chances
        if i < num_values - 1 and values[i + 1] > cut:
            continue
        if i < num_values - 2 and values[i + 2] > cut:
            continue

        break

    return kept


@dataclass
class DEdxResult:
    """Output of the initial track dE/dx estimation of one shower.

    Attributes
    ----------
    status : StatusEnum
        Outcome of the estimation
    values : List[float]
        Summary dE/dx value of each plane, `INVALID_DEDX` if the plane has
        no value after trimming
    best_plane : int
        Plane with the largest number of hits used, -1 if there is none
    num_hits : Dict[int, int]
        Number of hits used in each plane
    raw : Dict[int, List[float]]
        Ordered dE/dx values of each plane, before trimming
    trimmed : Dict[int, List[float]]
        Ordered dE/dx values of each plane, after trimming
    """

    status: StatusEnum
    values: List[float] = field(default_factory=list)
    best_plane: int = -1
    num_hits: Dict[int, int] = field(default_factory=dict)
    raw: Dict[int, List[float]] = field(default_factory=dict)
    trimmed: Dict[int, List[float]] = field(default_factory=dict)

    @property
    def success(self):
        """Whether the estimation succeeded.

        Returns
        -------
        bool
            `True` if the status is `SUCCESS`
        """
        return self.status == StatusEnum.SUCCESS


class TrajPointDEdx:
    """Estimates the dE/dx of the initial track of a shower using the
    trajectory of a fit to that track to get the local 3D pitch.

    This tool is best used with a sliding fit of the initial track whose
    trajectory points were matched to the space points of the track.
    """

    # Name of the tool (as specified in the configuration)
    name = "traj_point_dedx"

    def __init__(
        self,
        geo,
        detprop,
        calorimetry,
        sce=None,
        min_angle_to_wire=0.0,
        shaping_time=1e6,
        min_dist_cutoff=0.0,
        max_dist=2.0,
        dedx_track_length=1e6,
        dedx_cut=1e6,
        use_median=True,
        cut_start_position=False,
        t0_correct=False,
        sce_correct_pitch=False,
        sce_correct_efield=False,
        sce_input_corrected=False,
        sum_hit_snippets=False,
        start_position_label="shower_start_position",
        initial_track_label="initial_track",
        initial_track_space_points_label="initial_track_space_points",
        initial_track_hits_label="initial_track_hits",
        dedx_output_label="shower_dedx",
        best_plane_output_label="shower_best_plane",
        dedx_vec_output_label="shower_dedx_vec",
    ):
        """Store the dE/dx reconstruction parameters.

        Parameters
        ----------
        geo : Geometry
            Detector geometry
        detprop : DetectorProperties
            Detector properties
        calorimetry : callable
            Converts `(dqdx, time, plane, t0, efield)` into a dE/dx value
        sce : SpaceChargeBase, optional
            Space charge provider, needed for space charge corrections
        min_angle_to_wire : float, default 0.
            Minimum angle (in radians) between the track direction (projected
            onto the wire plane) and the wires for a hit to be used
        shaping_time : float, default 1e6
            Shaping time of the electronics in us. Hits for which the drift
            electrons take longer to cross one pitch are not used.
        min_dist_cutoff : float, default 0.
            Minimum distance (in wire pitches) between a hit and the start of
            the track for the hit to be used
        max_dist : float, default 2.
            Maximum distance (in wire pitches) between a space point and a
            trajectory point for them to be matched
        dedx_track_length : float, default 1e6
            Maximum distance (in cm) from the start of the track of the
            hits to be used
        dedx_cut : float, default 1e6
            dE/dx (in MeV/cm) used to find the end of the dE/dx sequence.
            Values above 10 disable the trimming.
        use_median : bool, default True
            Use the median of the sequence as the dE/dx rather than the mean
        cut_start_position : bool, default False
            Also apply the distance cuts w.r.t. the shower start position
        t0_correct : bool, default False
            Use the interaction time of the particle in the dE/dx conversion
        sce_correct_pitch : bool, default False
            Correct the pitch for space charge distortions
        sce_correct_efield : bool, default False
            Use the local electric field in the dE/dx conversion
        sce_input_corrected : bool, default False
            Whether the input positions are corrected for space charge
        sum_hit_snippets : bool, default False
            Only use one hit per readout snippet, summing the charge of all
            the hits fitted on that snippet
        *_label : str
            Labels of the input and output elements in the element store
        """
        # Space charge corrections only make sense on corrected positions
        if (sce_correct_pitch or sce_correct_efield) and not sce_input_corrected:
            raise ConfigurationError(
                "Can only correct for space charge effects if the input is "
                "already corrected."
            )

        # Store the collaborators
        self.geo = geo
        self.detprop = detprop
        self.calorimetry = calorimetry
        self.corrector = SpaceChargeCorrector(sce)

        # Store the selection parameters
        self.min_angle_to_wire = min_angle_to_wire
        self.shaping_time = shaping_time
        self.min_dist_cutoff = min_dist_cutoff
        self.max_dist = max_dist
        self.dedx_track_length = dedx_track_length
        self.dedx_cut = dedx_cut
        self.use_median = use_median
        self.cut_start_position = cut_start_position
        self.t0_correct = t0_correct
        self.sce_correct_pitch = sce_correct_pitch
        self.sce_correct_efield = sce_correct_efield
        self.sum_hit_snippets = sum_hit_snippets

        # Store the element labels
        self.start_position_label = start_position_label
        self.initial_track_label = initial_track_label
        self.initial_track_space_points_label = initial_track_space_points_label
        self.initial_track_hits_label = initial_track_hits_label
        self.dedx_output_label = dedx_output_label
        self.best_plane_output_label = best_plane_output_label
        self.dedx_vec_output_label = dedx_vec_output_label

    @classmethod
    def from_config(cls, cfg, calorimetry, geo=None):
        """Builds the tool from a configuration file or dictionary.

        The configuration contains the following blocks:
        - `geo`: detector name or geometry file (or `{detector, tag}`), only
          needed if no geometry is provided;
        - `detprop` (optional): detector properties;
        - `sce` (optional): space charge provider configuration;
        - `dedx`: parameters of this tool.

        Parameters
        ----------
        cfg : Union[str, dict]
            Path to a configuration file or configuration dictionary
        calorimetry : callable
            Calorimetric conversion function
        geo : Geometry, optional
            Detector geometry, loaded from the configuration if not provided

        Returns
        -------
        TrajPointDEdx
            Configured tool
        """
        cfg = parse_config(cfg)
        if geo is None:
            assert "geo" in cfg, "Must provide a `geo` block or a geometry."
            geo_cfg = cfg["geo"]
            if isinstance(geo_cfg, str):
                geo_cfg = {"detector": geo_cfg}
            geo = geo_factory(**geo_cfg)

        detprop = detprop_factory(cfg.get("detprop"))
        sce = sce_factory(cfg["sce"], geo) if cfg.get("sce") is not None else None

        return cls(geo, detprop, calorimetry, sce=sce, **cfg.get("dedx", {}))

    def __call__(self, store: ElementStore, association, t0=None) -> StatusEnum:
        """Estimate the dE/dx of one shower using inputs from an element store
        and write the outputs back to it.

        Parameters
        ----------
        store : ElementStore
            Element store holding the shower start position, the initial
            track and its space points (and hits if snippets are summed)
        association : callable
            Function which returns the hits associated with a space point
        t0 : float, optional
            Interaction time of the particle, assumed to be 0 if not provided

        Returns
        -------
        StatusEnum
            Outcome of the estimation
        """
        # Check that the necessary inputs are available
        required = [
            ("Start position", self.start_position_label),
            ("Initial track space points", self.initial_track_space_points_label),
            ("Initial track", self.initial_track_label),
        ]
        if self.sum_hit_snippets:
            required.append(("Initial track hits", self.initial_track_hits_label))
        for desc, label in required:
            if not store.check_element(label):
                logger.error("%s not set, returning.", desc)
                return StatusEnum.FAILURE

        track_hits = None
        if self.sum_hit_snippets:
            track_hits = store.get_element(self.initial_track_hits_label)

        result = self.compute(
            store.get_element(self.start_position_label),
            store.get_element(self.initial_track_space_points_label),
            store.get_element(self.initial_track_label),
            association,
            track_hits=track_hits,
            t0=t0,
        )
        if not result.success:
            return result.status

        # Store the outputs
        store.set_element(result.values, self.dedx_output_label)
        store.set_element(result.best_plane, self.best_plane_output_label)
        store.set_element(result.trimmed, self.dedx_vec_output_label)

        return result.status

    def compute(
        self,
        start,
        space_points: Sequence[SpacePoint],
        trajectory: Trajectory,
        association,
        track_hits: Optional[Sequence[Hit]] = None,
        t0: Optional[float] = None,
    ) -> DEdxResult:
        """Estimate the dE/dx of one shower.

        Parameters
        ----------
        start : np.ndarray
            (3) Shower start position
        space_points : Sequence[SpacePoint]
            Space points of the initial track, ordered along the track
        trajectory : Trajectory
            Trajectory of the initial track fit
        association : callable
            Function which returns the hits associated with a space point
        track_hits : Sequence[Hit], optional
            Hits of the initial track, needed to sum hit snippets
        t0 : float, optional
            Interaction time of the particle, assumed to be 0 if not provided

        Returns
        -------
        DEdxResult
            Per-plane dE/dx estimates
        """
        # Make sure that the requested corrections can be applied
        try:
            self.corrector.check(
                pitch=self.sce_correct_pitch, efield=self.sce_correct_efield
            )
        except ConfigurationError as err:
            logger.error("Cannot estimate the dE/dx: %s", err)
            return DEdxResult(StatusEnum.FATAL)

        if not len(space_points):
            logger.warning("No space points in the initial track, returning.")
            return DEdxResult(StatusEnum.FAILURE)

        if self.sum_hit_snippets and track_hits is None:
            logger.error("Initial track hits are needed to sum hit snippets.")
            return DEdxResult(StatusEnum.FAILURE)

        # Only consider hits in the same TPC as the start position
        start = np.asarray(start, dtype=np.float64)
        start_tpc = self.geo.find_tpc(start)

        # If no T0 is found, assume the particle happened at trigger time
        if not self.t0_correct or t0 is None:
            t0 = 0.0

        # Build the (primary hit -> secondary hits) map, if needed
        snippets = organize_hits(track_hits) if self.sum_hit_snippets else None

        # Loop over the space points, compute dE/dx for each of them
        planes = list(self.geo.iterate_planes())
        raw = {p: [] for p in planes}
        num_hits = {p: 0 for p in planes}
        for point in space_points:
            value = self.point_dedx(
                point, association, start, start_tpc, trajectory, snippets, t0
            )
            if value is None:
                continue

            plane, dedx = value
            num_hits[plane] += 1
            raw[plane].append(dedx)

        # Choose the best plane based on the number of hits
        best_plane, max_hits = -1, 0
        for plane, count in num_hits.items():
            logger.debug("Plane %d has %d hits.", plane, count)
            if count > max_hits:
                best_plane, max_hits = plane, count

        if best_plane < 0:
            logger.error("No hits in any plane, returning.")
            return DEdxResult(StatusEnum.FAILURE, num_hits=num_hits, raw=raw)

        # Search for blow ups and gradient changes, summarize each plane
        trimmed = {p: self.find_dedx_length(raw[p]) for p in planes}
        values = [self.summarize(trimmed[p]) for p in planes]

        logger.debug("Best plane: %d, dE/dx values: %s", best_plane, values)

        return DEdxResult(
            StatusEnum.SUCCESS,
            values=values,
            best_plane=best_plane,
            num_hits=num_hits,
            raw=raw,
            trimmed=trimmed,
        )

    def point_dedx(
        self, point, association, start, start_tpc, trajectory, snippets, t0
    ):
        """Computes the dE/dx of a single space point, if it passes all the
        selection criteria.

        Parameters
        ----------
        point : SpacePoint
            Space point of the initial track
        association : callable
            Function which returns the hits associated with a space point
        start : np.ndarray
            (3) Shower start position
        start_tpc : int
            TPC which contains the shower start position
        trajectory : Trajectory
            Trajectory of the initial track fit
        snippets : Dict[Hit, List[Hit]]
            Secondary hits of each primary hit, if snippets are summed
        t0 : float
            Interaction time of the particle

        Returns
        -------
        Tuple[int, float]
            Plane index and dE/dx value, `None` if the point is rejected
        """
        # Get the associated hit
        hits = association(point)
        if not len(hits):
            logger.warning(
                "No hit for space point %d, the association is likely wrong.",
                point.id,
            )
            return None

        hit = hits[0]
        if snippets is not None and hit not in snippets:
            return None

        # Only consider hits in the same TPC
        if hit.tpc != start_tpc:
            return None

        # Ignore space points within a few wires of the start position
        pitch = self.geo.wire_pitch(hit.tpc, hit.plane)
        pos = point.position
        if self.cut_start_position:
            dist_from_start = np.linalg.norm(pos - start)
            if dist_from_start < self.min_dist_cutoff * pitch:
                return None
            if dist_from_start > self.dedx_track_length:
                return None

        # Find the closest trajectory point of the track
        index = trajectory.closest_point(pos, self.max_dist * pitch)
        if index < 0:
            return None

        traj_pos = trajectory.location_at(index)
        traj_dist = np.linalg.norm(traj_pos - trajectory.start)
        if traj_dist == 0.0 or np.linalg.norm(traj_pos - start) == 0.0:
            return None
        if traj_dist < self.min_dist_cutoff * pitch:
            return None

        # Remove points with a direction too close to the wire direction, as
        # the hit finding struggles. Only project onto the wire plane (YZ),
        # the angle into the wire planes is handled by the shaping time cut.
        traj_dir = trajectory.direction_at(index)
        traj_dir_yz = np.array([0.0, traj_dir[1], traj_dir[2]])
        wire_dir = self.geo.wire_direction(hit.tpc, hit.plane)
        angle = linalg.angle(traj_dir_yz, wire_dir)
        if abs(np.pi / 2 - angle) < self.min_angle_to_wire:
            logger.debug("Space point %d removed by the angle cut.", point.id)
            return None

        # Remove points going too much into the wire plane, as the shaping
        # amplifier cuts the charge
        cos_wire = np.dot(traj_dir, wire_dir)
        if cos_wire == 0.0:
            logger.debug("Space point %d has an undefined pitch.", point.id)
            return None

        distance_in_x = traj_dir[0] * (pitch / cos_wire)
        if self.shaping_time < self.detprop.drift_time(distance_in_x):
            logger.debug("Space point %d removed by the shaping time cut.", point.id)
            return None

        if traj_dist > self.dedx_track_length:
            return None

        # Calculate the 3D pitch
        track_pitch = np.linalg.norm(traj_dir * (pitch / cos_wire))
        if self.sce_correct_pitch:
            track_pitch = self.corrector.correct_pitch(
                track_pitch, pos, linalg.unit(traj_dir), hit.tpc
            )

        # Calculate the dQ/dx
        dqdx = hit.integral
        if snippets is not None:
            dqdx += sum(secondary.integral for secondary in snippets[hit])
        dqdx /= track_pitch

        # Calculate the dE/dx
        efield = self.detprop.efield
        if self.sce_correct_efield:
            efield = self.corrector.correct_efield(efield, pos, hit.tpc)

        dedx = self.calorimetry(dqdx, hit.peak_time, hit.plane, t0, efield)

        return hit.plane, float(dedx)

    def find_dedx_length(self, values: Sequence[float]) -> List[float]:
        """Trims a sequence of dE/dx values with the configured cut.

        Parameters
        ----------
        values : Sequence[float]
            Ordered dE/dx values

        Returns
        -------
        List[float]
            Trimmed dE/dx values
        """
        return find_dedx_length(values, self.dedx_cut)

    def summarize(self, values: Sequence[float]) -> float:
        """Summarizes a sequence of dE/dx values into a single value.

        There are never enough values to fit a Landau distribution and get
        its most probable value, use the median or the mean instead.

        Parameters
        ----------
        values : Sequence[float]
            Trimmed dE/dx values

        Returns
        -------
        float
            Median or mean dE/dx, `INVALID_DEDX` if there is no value
        """
        if not len(values):
            return INVALID_DEDX

        if self.use_median:
            return float(np.median(values))

        # Unphysical values do not contribute to the sum but count in the mean
        low, high = DEDX_MEAN_RANGE
        total = sum(v for v in values if low <= v <= high)

        return total / len(values)
