from __future__ import annotations

import unittest

import numpy as np

from gridwise_plot import EmptyScaleError, PlotDataError
from gridwise_plot.scales import (
    CategoricalSingle,
    Count,
    NumericKind,
    NumericSingle,
    NumericSplit,
    axis_points,
    classify_scale,
    format_tick,
    format_value,
    numeric_kind,
    sequential_positions,
    tick_slots,
)


class ScaleClassifierTests(unittest.TestCase):
    def test_labels_classify_as_categorical_in_input_order(self) -> None:
        kind = classify_scale(["Jan", "Feb", "Mar", "Feb"])
        self.assertEqual(kind, CategoricalSingle(points=("Jan", "Feb", "Mar")))

    def test_signed_numbers_split_around_zero(self) -> None:
        kind = classify_scale([-5, -2, 0, 3, 7])
        self.assertIsInstance(kind, NumericSplit)
        assert isinstance(kind, NumericSplit)
        self.assertEqual(kind.positives, (0, 3, 7))
        self.assertEqual(kind.negatives, (-2, -5))
        self.assertTrue(kind.shares_zero)

    def test_partitions_are_ordered_outward_from_zero(self) -> None:
        kind = classify_scale([7, -5, 3, -2])
        assert isinstance(kind, NumericSplit)
        self.assertEqual(kind.positives, (3, 7))
        self.assertEqual(kind.negatives, (-2, -5))
        self.assertFalse(kind.shares_zero)

    def test_all_negative_scale_is_single_sided(self) -> None:
        kind = classify_scale([-1, -10, -4])
        self.assertEqual(kind, NumericSingle(points=(-1, -4, -10)))
        assert isinstance(kind, NumericSingle)
        self.assertTrue(kind.is_negative)

    def test_all_positive_scale_is_single_sided(self) -> None:
        kind = classify_scale([2, 1, 3])
        self.assertEqual(kind, NumericSingle(points=(1, 2, 3)))

    def test_mixed_int_and_float_promotes_to_float(self) -> None:
        kind = classify_scale([1, 2.5, 4])
        assert isinstance(kind, NumericSingle)
        self.assertEqual(kind.points, (1.0, 2.5, 4.0))
        self.assertTrue(all(isinstance(v, float) for v in kind.points))

    def test_numpy_scalars_are_accepted(self) -> None:
        kind = classify_scale(np.asarray([3, 1, 2], dtype=np.int64))
        assert isinstance(kind, NumericSingle)
        self.assertEqual(kind.points, (1, 2, 3))
        self.assertEqual(numeric_kind(kind.points[0]), NumericKind.INTEGER)

    def test_empty_scale_raises(self) -> None:
        with self.assertRaises(EmptyScaleError):
            classify_scale([])

    def test_mixed_labels_and_numbers_raise(self) -> None:
        with self.assertRaises(PlotDataError):
            classify_scale(["a", 1])

    def test_non_finite_values_raise(self) -> None:
        with self.assertRaises(PlotDataError):
            classify_scale([1.0, float("nan")])
        with self.assertRaises(PlotDataError):
            classify_scale([1.0, float("inf")])

    def test_booleans_are_not_numbers(self) -> None:
        with self.assertRaises(PlotDataError):
            classify_scale([True, False])

    def test_sequential_replaces_points_with_counts(self) -> None:
        kind = classify_scale([10, 250, -3, -40, 0], sequential=True)
        assert isinstance(kind, NumericSplit)
        self.assertEqual(kind.positives, (Count(0), Count(1), Count(2)))
        self.assertEqual(kind.negatives, (Count(-1), Count(-2)))
        self.assertEqual(numeric_kind(kind.positives[1]), NumericKind.COUNT)

    def test_sequential_positions_match_sequential_scale(self) -> None:
        values = [10, 250, -3, -40, 0]
        positions = sequential_positions(values)
        self.assertEqual(positions[0], Count(0))
        self.assertEqual(positions[250], Count(2))
        self.assertEqual(positions[-40], Count(-2))
        kind = classify_scale(values, sequential=True)
        self.assertEqual(set(positions.values()), set(axis_points(kind)))

    def test_sequential_positions_for_labels_follow_input_order(self) -> None:
        self.assertEqual(sequential_positions(["b", "a"]), {"b": Count(0), "a": Count(1)})

    def test_tick_slots_drop_the_shared_zero(self) -> None:
        self.assertEqual(tick_slots(classify_scale(["a", "b"])), 2)
        self.assertEqual(tick_slots(classify_scale([0, 1, 2])), 2)
        self.assertEqual(tick_slots(classify_scale([-5, -2, 0, 3, 7])), 4)
        self.assertEqual(tick_slots(classify_scale([-1, 1])), 2)


class FormatTests(unittest.TestCase):
    def test_format_value_by_subtype(self) -> None:
        self.assertEqual(format_value("label"), "label")
        self.assertEqual(format_value(42), "42")
        self.assertEqual(format_value(Count(3)), "3")
        self.assertEqual(format_value(2.50), "2.5")

    def test_format_tick_trims_and_switches_to_scientific(self) -> None:
        self.assertEqual(format_tick(0.1 + 0.2), "0.3")
        self.assertEqual(format_tick(-0.0), "0")
        self.assertEqual(format_tick(2_500_000.0), "2.5000e+06")


if __name__ == "__main__":
    unittest.main()
