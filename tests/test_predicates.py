"""Tests for inclusion predicates."""

import unittest

import numpy as np

from floodfill.errors import ConfigurationError
from floodfill.grid import ArrayGrid
from floodfill.predicates import (
    FunctionPredicate, ValuePredicate, ThresholdPredicate,
    SpatialFunctionPredicate, MaskPredicate, as_predicate,
)


class TestPredicates(unittest.TestCase):
    """Test cases for the predicate classes."""

    def setUp(self):
        self.image = np.array([
            [0, 10, 20],
            [30, 40, 50],
        ], dtype=np.uint8)
        self.grid = ArrayGrid(self.image)

    def test_threshold_is_inclusive(self):
        predicate = ThresholdPredicate(self.grid, lower=10, upper=40)
        self.assertFalse(predicate.is_included((0, 0)))
        self.assertTrue(predicate.is_included((0, 1)))
        self.assertTrue(predicate.is_included((1, 1)))
        self.assertFalse(predicate.is_included((1, 2)))

    def test_threshold_single_bound(self):
        lower_only = ThresholdPredicate(self.grid, lower=30)
        self.assertFalse(lower_only.is_included((0, 2)))
        self.assertTrue(lower_only.is_included((1, 2)))

        upper_only = ThresholdPredicate(self.grid, upper=0)
        self.assertTrue(upper_only.is_included((0, 0)))
        self.assertFalse(upper_only.is_included((0, 1)))

    def test_threshold_rejects_nan(self):
        grid = ArrayGrid(np.array([[5.0, np.nan, np.nan, 5.0]]))
        self.assertFalse(ThresholdPredicate(grid, lower=1, upper=9).is_included((0, 1)))
        self.assertFalse(ThresholdPredicate(grid, lower=1).is_included((0, 1)))
        self.assertFalse(ThresholdPredicate(grid, upper=9).is_included((0, 2)))
        self.assertTrue(ThresholdPredicate(grid, lower=1, upper=9).is_included((0, 3)))

    def test_threshold_validation(self):
        with self.assertRaises(ConfigurationError):
            ThresholdPredicate(self.grid)
        with self.assertRaises(ConfigurationError):
            ThresholdPredicate(self.grid, lower=5, upper=1)

    def test_value_predicate(self):
        predicate = ValuePredicate(self.grid, lambda v: v % 20 == 0)
        self.assertTrue(predicate.is_included((0, 0)))
        self.assertFalse(predicate.is_included((0, 1)))
        self.assertTrue(predicate.is_included((1, 1)))

    def test_function_predicate(self):
        predicate = FunctionPredicate(lambda c: c[0] == c[1])
        self.assertTrue(predicate.is_included((1, 1)))
        self.assertFalse(predicate((0, 1)))

    def test_spatial_function_predicate(self):
        grid = ArrayGrid(self.image, spacing=(2.0, 0.5), origin=(10.0, -1.0))
        points = []

        def inside_disc(point):
            points.append(point)
            return np.linalg.norm(point - np.array([12.0, -0.5])) <= 0.5

        predicate = SpatialFunctionPredicate(grid, inside_disc)
        self.assertTrue(predicate.is_included((1, 1)))
        self.assertFalse(predicate.is_included((0, 1)))
        np.testing.assert_allclose(points[0], [12.0, -0.5])

    def test_mask_predicate(self):
        predicate = MaskPredicate(self.grid)
        self.assertFalse(predicate.is_included((0, 0)))
        self.assertTrue(predicate.is_included((0, 1)))

    def test_as_predicate(self):
        threshold = ThresholdPredicate(self.grid, lower=1)
        self.assertIs(as_predicate(threshold), threshold)

        wrapped = as_predicate(lambda c: sum(c) > 1)
        self.assertTrue(wrapped.is_included((1, 1)))
        self.assertFalse(wrapped.is_included((0, 1)))

        with self.assertRaises(ConfigurationError):
            as_predicate(42)

    def test_results_are_plain_bools(self):
        predicate = ValuePredicate(self.grid, lambda v: v)
        self.assertIs(predicate.is_included((0, 1)), True)
        self.assertIs(predicate.is_included((0, 0)), False)


if __name__ == '__main__':
    unittest.main()
