from __future__ import annotations

import unittest

from gridwise_plot.style import DEFAULT_STYLE, hex_to_rgba, validate_style_tokens


class StyleTokenTests(unittest.TestCase):
    def test_hex_to_rgba(self) -> None:
        self.assertEqual(hex_to_rgba("#141A24E6"), (20, 26, 36, 230))
        self.assertEqual(hex_to_rgba("#CD0096"), (205, 0, 150, 255))
        with self.assertRaises(ValueError):
            hex_to_rgba("CD0096")

    def test_defaults_validate(self) -> None:
        self.assertEqual(validate_style_tokens(), DEFAULT_STYLE)

    def test_overrides_merge_with_defaults(self) -> None:
        style = validate_style_tokens({"axis_color": "#00FF00", "label_font_px": 20})
        self.assertEqual(style.rgba("axis_color"), (0, 255, 0, 255))
        self.assertEqual(style.label_font_px, 20.0)
        self.assertEqual(style.background, DEFAULT_STYLE.background)

    def test_bad_tokens_are_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown style token"):
            validate_style_tokens({"shadow": "#000000"})
        with self.assertRaisesRegex(ValueError, "axis_color"):
            validate_style_tokens({"axis_color": "magenta"})
        with self.assertRaisesRegex(ValueError, "point_font_px"):
            validate_style_tokens({"point_font_px": 0})
        with self.assertRaisesRegex(ValueError, "font_family"):
            validate_style_tokens({"font_family": " "})

    def test_rgba_rejects_non_colour_tokens(self) -> None:
        with self.assertRaises(ValueError):
            DEFAULT_STYLE.rgba("font_family")


if __name__ == "__main__":
    unittest.main()
