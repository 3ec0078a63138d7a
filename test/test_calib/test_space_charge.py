"""Tests for the space charge providers and corrections."""

import numpy as np
import pytest

from ember.calib import (
    MapSpaceCharge,
    NoSpaceCharge,
    SpaceChargeCorrector,
    UniformSpaceCharge,
    sce_factory,
)
from ember.utils.errors import ConfigurationError


@pytest.fixture(name="grid")
def fixture_grid():
    """Space charge maps with a calibration offset of 10% of z along z."""
    x = np.array([0.0, 200.0])
    y = np.array([-200.0, 200.0])
    z = np.array([0.0, 500.0])
    pos_offsets = np.zeros((2, 2, 2, 3))
    cal_pos_offsets = np.zeros((2, 2, 2, 3))
    cal_pos_offsets[:, :, 1, 2] = 50.0

    return dict(x=x, y=y, z=z, pos_offsets=pos_offsets, cal_pos_offsets=cal_pos_offsets)


class TestProviders:
    """Test the space charge providers."""

    def test_none(self):
        """Test that the trivial provider disables all corrections."""
        sce = NoSpaceCharge()
        assert not sce.enable_cal_spatial_sce
        assert not sce.enable_sim_efield_sce
        np.testing.assert_array_equal(sce.get_pos_offsets(np.zeros(3), 0), np.zeros(3))

    def test_uniform(self):
        """Test the uniform provider."""
        sce = UniformSpaceCharge(pos_offset=[1.0, 0.0, 0.0])
        assert sce.enable_cal_spatial_sce
        assert sce.enable_sim_efield_sce
        np.testing.assert_array_equal(sce.get_pos_offsets(np.zeros(3), 0), [1, 0, 0])
        np.testing.assert_array_equal(
            sce.get_cal_pos_offsets(np.zeros(3), 0), [-1, 0, 0]
        )

    def test_nominal_efield_dir(self):
        """Test the nominal field direction of each TPC."""
        sce = UniformSpaceCharge()
        np.testing.assert_array_equal(sce.nominal_efield_dir(1), [1.0, 0.0, 0.0])

        sce = UniformSpaceCharge(efield_dirs=[[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        np.testing.assert_array_equal(sce.nominal_efield_dir(0), [-1.0, 0.0, 0.0])

    def test_map(self, grid):
        """Test the interpolation of the distortion maps."""
        sce = MapSpaceCharge(**grid)
        offset = sce.get_cal_pos_offsets(np.array([100.0, 0.0, 100.0]), 0)
        np.testing.assert_allclose(offset, [0.0, 0.0, 10.0])

        # Positions outside of the grid are clipped to its edge
        offset = sce.get_cal_pos_offsets(np.array([100.0, 0.0, 600.0]), 0)
        np.testing.assert_allclose(offset, [0.0, 0.0, 50.0])

        np.testing.assert_allclose(sce.get_efield_offsets(np.zeros(3), 0), np.zeros(3))

    def test_map_file(self, grid, tmp_path):
        """Test loading the distortion maps from a file."""
        path = tmp_path / "sce.npz"
        np.savez(path, **grid)
        sce = MapSpaceCharge(path=str(path))

        offset = sce.get_cal_pos_offsets(np.array([100.0, 0.0, 250.0]), 0)
        np.testing.assert_allclose(offset, [0.0, 0.0, 25.0])

    def test_map_shape(self, grid):
        """Test that inconsistent maps are rejected."""
        grid["pos_offsets"] = np.zeros((3, 2, 2, 3))
        with pytest.raises(AssertionError):
            MapSpaceCharge(**grid)

    def test_factory(self, geo):
        """Test building providers from their configuration."""
        assert isinstance(sce_factory("none"), NoSpaceCharge)

        sce = sce_factory({"name": "uniform"}, geo)
        assert isinstance(sce, UniformSpaceCharge)
        np.testing.assert_array_equal(sce.nominal_efield_dir(0), [-1.0, 0.0, 0.0])
        np.testing.assert_array_equal(sce.nominal_efield_dir(1), [1.0, 0.0, 0.0])

        with pytest.raises(ValueError):
            sce_factory({"name": "unknown"})


class TestSpaceChargeCorrector:
    """Test the space charge corrections."""

    def test_check(self):
        """Test that disabled corrections raise."""
        corrector = SpaceChargeCorrector(NoSpaceCharge())
        corrector.check()
        with pytest.raises(ConfigurationError):
            corrector.check(pitch=True)
        with pytest.raises(ConfigurationError):
            corrector.check(efield=True)

        with pytest.raises(ConfigurationError):
            SpaceChargeCorrector(None).correct_efield(0.5, np.zeros(3), 0)

    def test_uniform_pitch(self):
        """Test that a uniform distortion does not change the pitch."""
        corrector = SpaceChargeCorrector(UniformSpaceCharge(pos_offset=[1.0, 2.0, 0.0]))
        pitch = corrector.correct_pitch(
            0.3, np.array([100.0, 0.0, 100.0]), np.array([0.0, 0.0, 1.0]), 1
        )
        assert pitch == pytest.approx(0.3)

    def test_map_pitch(self, grid):
        """Test the pitch correction with a stretching distortion."""
        corrector = SpaceChargeCorrector(MapSpaceCharge(**grid))
        pitch = corrector.correct_pitch(
            0.3, np.array([100.0, 0.0, 100.0]), np.array([0.0, 0.0, 1.0]), 1
        )
        assert pitch == pytest.approx(0.33)

    def test_efield(self, geo):
        """Test the local field magnitude."""
        sce = sce_factory({"name": "uniform", "efield_offset": [0.02, 0.0, 0.0]}, geo)
        corrector = SpaceChargeCorrector(sce)

        assert corrector.correct_efield(0.5, np.zeros(3), 1) == pytest.approx(0.51)
        assert corrector.correct_efield(0.5, np.zeros(3), 0) == pytest.approx(0.49)
