from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import tempfile
import unittest

import numpy as np
import pandas as pd

from gridwise_plot import EmptyScaleError, PlotDataError
from gridwise_plot.adapters import coerce_scale, read_table, scale_from_frame


class CoerceScaleTests(unittest.TestCase):
    def test_list_passthrough(self) -> None:
        self.assertEqual(coerce_scale(["a", "b"]), ("a", "b"))
        self.assertEqual(coerce_scale([1, Decimal("2.5")]), (1, 2.5))

    def test_numpy_array_values_become_python_scalars(self) -> None:
        values = coerce_scale(np.asarray([3, 1, 2], dtype=np.int32))
        self.assertEqual(values, (3, 1, 2))
        self.assertTrue(all(type(v) is int for v in values))

    def test_pandas_series(self) -> None:
        self.assertEqual(coerce_scale(pd.Series([0.5, -1.0])), (0.5, -1.0))
        self.assertEqual(coerce_scale(pd.Series(["x", "y"])), ("x", "y"))

    def test_rejects_bad_shapes_and_missing_values(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_scale(np.zeros((2, 2)))
        with self.assertRaises(PlotDataError):
            coerce_scale(pd.DataFrame({"a": [1]}))
        with self.assertRaises(PlotDataError):
            coerce_scale(pd.Series([1.0, np.nan]))
        with self.assertRaises(PlotDataError):
            coerce_scale(["a", None])
        with self.assertRaises(PlotDataError):
            coerce_scale("abc")
        with self.assertRaises(EmptyScaleError):
            coerce_scale([])


class TableTests(unittest.TestCase):
    def test_read_table_and_pick_columns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.csv"
            path.write_text("month,sales\njan,3\nfeb,5\n", encoding="utf-8")
            frame = read_table(path)
        self.assertEqual(scale_from_frame(frame, "month"), ("jan", "feb"))
        self.assertEqual(scale_from_frame(frame, "sales"), (3, 5))
        with self.assertRaisesRegex(PlotDataError, "column not found"):
            scale_from_frame(frame, "profit")

    def test_missing_file_is_a_data_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(PlotDataError):
                read_table(Path(tmp) / "nope.csv")


if __name__ == "__main__":
    unittest.main()
