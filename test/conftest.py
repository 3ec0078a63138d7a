"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pytest

from ember.calib import FunctionCalorimetry
from ember.data import Hit, HitAssociation, SpacePoint, Trajectory
from ember.geo import DetectorProperties, geo_factory
from ember.utils.enums import SignalTypeEnum


@pytest.fixture(name="geo")
def fixture_geo():
    """Toy two-TPC geometry shipped with the package."""
    return geo_factory("toy")


@pytest.fixture(name="detprop")
def fixture_detprop():
    """Default detector properties."""
    return DetectorProperties()


@pytest.fixture(name="calorimetry")
def fixture_calorimetry():
    """Linear calorimetric conversion: dE/dx = dQ/dx / 100."""
    return FunctionCalorimetry(lambda dqdx, time, plane, t0, efield: dqdx / 100.0)


def make_hit(tpc=1, plane=2, wire=0, integral=60.0, peak_time=0.0, **kwargs):
    """Builds a hit with sensible defaults for the fields a test does not
    care about.
    """
    cfg = dict(start_tick=0, end_tick=10)
    cfg.update(kwargs)
    signal_type = SignalTypeEnum.COLLECTION if plane == 2 else SignalTypeEnum.INDUCTION
    cfg.setdefault("signal_type", signal_type)

    return Hit(
        tpc=tpc,
        plane=plane,
        wire=wire,
        peak_time=peak_time,
        integral=integral,
        **cfg,
    )


@pytest.fixture(name="straight_track")
def fixture_straight_track():
    """Straight initial track along +z in TPC 1, sampled every 0.5 cm.

    Each space point is matched to a collection plane hit with an integral
    of 60 ADC. With a pitch of 0.3 cm and a direction parallel to the wire
    direction, this corresponds to dQ/dx = 200 ADC/cm.

    Returns
    -------
    dict
        Start position, space points, trajectory and hit association
    """
    start = np.array([100.0, 0.0, 100.0])
    num_points = 10
    positions = start + np.outer(0.5 * np.arange(num_points), [0.0, 0.0, 1.0])
    directions = np.tile([0.0, 0.0, 1.0], (num_points, 1))

    points = [SpacePoint(i, pos) for i, pos in enumerate(positions)]
    hits = [make_hit(wire=i) for i in range(num_points)]
    association = HitAssociation({p.id: [h] for p, h in zip(points, hits)})
    trajectory = Trajectory(positions, directions)

    return dict(
        start=start,
        points=points,
        hits=hits,
        association=association,
        trajectory=trajectory,
    )


@pytest.fixture(name="hit_factory")
def fixture_hit_factory():
    """Function which builds hits, see :func:`make_hit`."""
    return make_hit
