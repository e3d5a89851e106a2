from __future__ import annotations

import unittest

from gridwise_plot.axis import Axis, build_axes, build_axis, zero_fraction
from gridwise_plot.scales import CategoricalSingle, NumericSingle, NumericSplit, classify_scale


class AxisBuilderTests(unittest.TestCase):
    def test_zero_fraction_per_kind(self) -> None:
        self.assertEqual(zero_fraction(classify_scale(["a", "b"])), 1.0)
        self.assertEqual(zero_fraction(classify_scale([1, 2, 3])), 1.0)
        self.assertEqual(zero_fraction(classify_scale([-1, -2])), 0.0)
        # 0 shared: two positive slots out of four
        self.assertAlmostEqual(zero_fraction(classify_scale([-5, -2, 0, 3, 7])), 0.5)
        self.assertAlmostEqual(zero_fraction(classify_scale([-1, 1, 2, 3])), 0.75)

    def test_build_axis_carries_cosmetic_flags(self) -> None:
        axis = build_axis(["a", "b"], label="Month", caption="Source: ledger", clean=True)
        self.assertIsInstance(axis.kind, CategoricalSingle)
        self.assertTrue(axis.is_categorical)
        self.assertFalse(axis.is_split)
        self.assertEqual(axis.label, "Month")
        self.assertEqual(axis.caption, "Source: ledger")
        self.assertTrue(axis.clean)

    def test_build_axes_cross_wires_zero_fractions(self) -> None:
        x_axis, y_axis = build_axes([-1, 1, 2, 3], [-5, -2, 0, 3, 7])
        self.assertAlmostEqual(x_axis.fraction, 0.75)
        self.assertAlmostEqual(y_axis.fraction, 0.5)
        self.assertAlmostEqual(x_axis.cross_fraction, y_axis.fraction)
        self.assertAlmostEqual(y_axis.cross_fraction, x_axis.fraction)

    def test_horizontal_swaps_scales_and_labels(self) -> None:
        x_axis, y_axis = build_axes(
            ["a", "b", "c"],
            [1, 2, 3],
            x_label="category",
            y_label="amount",
            horizontal=True,
        )
        self.assertIsInstance(x_axis.kind, NumericSingle)
        self.assertIsInstance(y_axis.kind, CategoricalSingle)
        self.assertEqual(x_axis.label, "amount")
        self.assertEqual(y_axis.label, "category")

    def test_sequential_flag_applies_per_axis(self) -> None:
        x_axis, y_axis = build_axes([100, 200], [-4, 4], sequential_x=True)
        self.assertEqual(x_axis.kind, NumericSingle(points=(0, 1)))
        self.assertIsInstance(y_axis.kind, NumericSplit)

    def test_fraction_out_of_range_is_rejected(self) -> None:
        kind = classify_scale([1, 2])
        with self.assertRaises(ValueError):
            Axis(kind=kind, fraction=1.5)
        with self.assertRaises(ValueError):
            Axis(kind=kind, cross_fraction=-0.1)

    def test_cache_key_follows_toggles(self) -> None:
        axis = build_axis([1, 2, 3])
        self.assertEqual(axis.cache_key(), build_axis([3, 2, 1]).cache_key())
        self.assertNotEqual(axis.cache_key(), axis.with_clean(True).cache_key())
        self.assertNotEqual(axis.cache_key(), build_axis([1, 2, 3], sequential=True).cache_key())
        self.assertEqual(axis.with_label("n").label, "n")
        self.assertEqual(axis.with_caption("c").caption, "c")


if __name__ == "__main__":
    unittest.main()
