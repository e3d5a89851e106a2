from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, Sequence

import pandas as pd

from gridwise_plot import (
    CategoricalSingle,
    Chart,
    ChartItem,
    ChartOptions,
    ColorEngine,
    GraphBar,
    GraphLine,
    GraphStackedBar,
    LegendPosition,
    PlotDataError,
    assign_colors,
    chart_from_scales,
    classify_scale,
    layout_axis,
    read_table,
    scale_from_frame,
    sequential_positions,
)
from gridwise_plot.output import DrawnOutput
from gridwise_plot.scales import format_value


LOGGER = logging.getLogger("gridwise")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gridwise")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a chart from a CSV file to PNG.")
    _add_data_args(render)
    render.add_argument("--out", type=Path, default=Path("chart.png"))
    render.add_argument(
        "--legend",
        default=LegendPosition.TOP_RIGHT.value,
        help="Legend placement, e.g. top-right, bottom-center, none.",
    )
    render.add_argument("--seed", type=float, default=0.0, help="Colour engine seed.")
    render.add_argument("--light", action="store_true", help="Pick colours for a light background.")
    render.add_argument("--gradual", action="store_true", help="Shade series from one hue.")
    render.add_argument("--x-label", default=None)
    render.add_argument("--y-label", default=None)
    render.add_argument("--caption", default=None)

    layout = sub.add_parser("layout", help="Print the pixel position of every tick as JSON.")
    _add_data_args(layout)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "render":
            return _run_render(args)
        if args.command == "layout":
            return _run_layout(args)
    except (PlotDataError, ValueError) as exc:
        print(f"gridwise: error: {exc}", file=sys.stderr)
        return 2
    raise RuntimeError(f"unsupported command: {args.command}")


def _add_data_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("data", type=Path, help="CSV file with a header row.")
    parser.add_argument("--x", required=True, help="Column holding the x scale.")
    parser.add_argument("--y", default=None, help="Column holding the y values (line and bar charts).")
    parser.add_argument("--kind", choices=["line", "bar", "stacked"], default="line")
    parser.add_argument("--stack", nargs="+", default=None, help="Columns stacked in each bar (stacked charts).")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=500)
    parser.add_argument("--clean", action="store_true", help="Suppress the thin gridlines between ticks.")
    parser.add_argument("--sequential-x", action="store_true", help="Place x values at evenly spaced positions.")
    parser.add_argument("--horizontal", action="store_true", help="Lay the x scale out vertically.")
    parser.add_argument("--log-level", default="WARNING")


def _build_chart(args: argparse.Namespace, engine: ColorEngine | None = None, **chart_kwargs: Any) -> Chart:
    frame = read_table(args.data)
    raw_xs = list(scale_from_frame(frame, args.x))
    xs = raw_xs
    engine = engine if engine is not None else ColorEngine()

    # label columns are already evenly spaced and keep their names
    if args.sequential_x and not isinstance(classify_scale(raw_xs), CategoricalSingle):
        positions = sequential_positions(raw_xs)
        xs = [positions[x] for x in raw_xs]

    if args.kind == "stacked":
        if not args.stack:
            raise PlotDataError("--stack is required for stacked charts")
        ys, items = _stacked_items(frame, xs, args.stack, engine)
    else:
        if args.y is None:
            raise PlotDataError(f"--y is required for {args.kind} charts")
        ys = list(scale_from_frame(frame, args.y))
        items = _line_items(xs, ys, args.y, engine) if args.kind == "line" else _bar_items(xs, ys, raw_xs, engine)

    options = ChartOptions(horizontal=args.horizontal, legend_owner=0)
    LOGGER.info("loaded %d rows from %s as a %s chart", len(xs), args.data, args.kind)
    return chart_from_scales(
        xs,
        ys,
        items,
        width=args.width,
        height=args.height,
        sequential_x=args.sequential_x,
        clean=args.clean,
        options=options,
        **chart_kwargs,
    )


def _line_items(xs: list[Any], ys: list[Any], label: str, engine: ColorEngine) -> list[ChartItem]:
    return [GraphLine(points=tuple(zip(xs, ys)), color=engine.generate(), label=label)]


def _bar_items(xs: list[Any], ys: list[Any], labels: list[Any], engine: ColorEngine) -> list[ChartItem]:
    return [
        GraphBar(x=x, y=y, color=engine.generate(), label=format_value(label))
        for x, y, label in zip(xs, ys, labels, strict=True)
    ]


def _stacked_items(
    frame: pd.DataFrame,
    xs: list[Any],
    columns: Sequence[str],
    engine: ColorEngine,
) -> tuple[list[float], list[ChartItem]]:
    for column in columns:
        if column not in frame.columns:
            raise PlotDataError(f"column not found: {column}")
    values = frame[list(columns)].apply(pd.to_numeric, errors="coerce")
    if values.isna().to_numpy().any():
        raise PlotDataError("stacked columns must be numeric with no missing values")
    if (values < 0).to_numpy().any():
        raise PlotDataError("stacked columns must be >= 0")

    colors = assign_colors(list(columns), engine)
    totals = [float(t) for t in values.sum(axis=1)]
    items: list[ChartItem] = []
    for i, (x, total) in enumerate(zip(xs, totals)):
        row = values.iloc[i]
        fractions = {c: (float(row[c]) / total if total else 0.0) for c in columns}
        items.append(GraphStackedBar(id=i, x=x, y=total, fractions=fractions, colors=colors))
    return totals, items


def _run_render(args: argparse.Namespace) -> int:
    engine = ColorEngine(args.seed, dark=not args.light, mode="gradual" if args.gradual else "normal")
    chart = _build_chart(
        args,
        engine,
        x_label=args.x_label if args.x_label is not None else args.x,
        y_label=args.y_label if args.y_label is not None else args.y,
        caption=args.caption,
        legend=LegendPosition.parse(args.legend),
    )
    out = chart.save_png(args.out)
    print(f"wrote {out} ({chart.width}x{chart.height})")
    return 0


def _run_layout(args: argparse.Namespace) -> int:
    chart = _build_chart(args)
    x_out = layout_axis(chart.x_axis, chart.width, chart.height, is_x_axis=True)
    y_out = layout_axis(chart.y_axis, chart.width, chart.height, is_x_axis=False)
    print(json.dumps({"x": _output_json(x_out), "y": _output_json(y_out)}, indent=2))
    return 0


def _output_json(output: DrawnOutput) -> dict[str, Any]:
    return {
        "axis_pos": output.axis_pos,
        "spacing": output.spacing,
        "step": output.step,
        "outline_density": output.outline_density,
        "ticks": [[format_value(value), pixel] for value, pixel in output.record.items()],
    }


if __name__ == "__main__":
    raise SystemExit(main())
