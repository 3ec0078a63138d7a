"""Tests for the calorimetric conversion interface."""

import pytest

from ember.calib import CalorimetryBase, FunctionCalorimetry


class TestCalorimetry:
    """Test the calorimetric converters."""

    def test_function(self, calorimetry):
        """Test wrapping a function."""
        assert calorimetry(200.0, 0.0, 2) == pytest.approx(2.0)
        assert calorimetry.dedx(300.0, 0.0, 2, 0.0, 0.5) == pytest.approx(3.0)

    def test_arguments(self):
        """Test that all the arguments are forwarded."""
        calorimetry = FunctionCalorimetry(lambda *args: args)
        assert calorimetry(1.0, 2.0, 3) == (1.0, 2.0, 3, 0.0, None)
        assert calorimetry(1.0, 2.0, 3, 4.0, 0.5) == (1.0, 2.0, 3, 4.0, 0.5)

    def test_not_callable(self):
        """Test that a non-callable conversion is rejected."""
        with pytest.raises(AssertionError):
            FunctionCalorimetry(3.0)

    def test_abstract(self):
        """Test that the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            CalorimetryBase()
