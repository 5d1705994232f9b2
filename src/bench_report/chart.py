# This is free software for the public good of a permacomputer hosted at
# permacomputer.com, an always-on computer by the people, for the people.
# One which is durable, easy to repair, & distributed like tap water
# for machine learning intelligence.
#
# The permacomputer is community-owned infrastructure optimized around
# four values:
#
#   TRUTH      First principles, math & science, open source code freely distributed
#   FREEDOM    Voluntary partnerships, freedom from tyranny & corporate control
#   HARMONY    Minimal waste, self-renewing systems with diverse thriving connections
#   LOVE       Be yourself without hurting others, cooperation through natural law
#
# This software contributes to that vision by turning scattered load-test results into one comparison report, readable by all.
# Code is seeds to sprout on any abandoned technology.

"""
Comparison chart: a Vega-Lite bar chart spec plus an off-screen SVG renderer.

build_chart_spec() is pure and has no plotting dependency. The spec it
returns is what gets written to report.vega.json. render_chart_svg()
draws that same spec with matplotlib on a canvas that never touches a
display.
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.figure import Figure

from . import console

VEGA_LITE_SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"
CATEGORY_FIELD = "gateway-setup"
VALUE_FIELD = "duration (p95)"
CHART_WIDTH = 600
CHART_HEIGHT = 400

BAR_COLOR = "#4c78a8"  # vega default category color
DPI = 100


def build_chart_spec(points: Sequence[Tuple[str, int]]) -> Dict[str, Any]:
    """
    Build a bar chart spec with one bar per scenario.

    Args:
        points: (scenario name, p95 duration in ms) pairs, in report order

    Returns:
        Vega-Lite spec dict
    """
    return {
        "width": CHART_WIDTH,
        "height": CHART_HEIGHT,
        "background": None,
        "$schema": VEGA_LITE_SCHEMA,
        "description": "",
        "data": {
            "values": [
                {CATEGORY_FIELD: name, VALUE_FIELD: value}
                for name, value in points
            ],
        },
        "mark": "bar",
        "encoding": {
            "x": {
                "field": CATEGORY_FIELD,
                "type": "nominal",
                "sort": "-y",
            },
            "y": {
                "field": VALUE_FIELD,
                "type": "quantitative",
            },
        },
    }


def chart_points(spec: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Read the {category, value} rows back out of a spec, in data order."""
    x_field = spec["encoding"]["x"]["field"]
    y_field = spec["encoding"]["y"]["field"]
    return [
        {"category": row[x_field], "value": row[y_field]}
        for row in spec["data"]["values"]
    ]


def _sorted_rows(spec: Dict[str, Any]) -> List[Dict[str, Any]]:
    rows = list(spec["data"]["values"])
    x = spec["encoding"]["x"]
    y_field = spec["encoding"]["y"]["field"]
    sort = x.get("sort")
    if sort == "-y":
        rows.sort(key=lambda row: row[y_field], reverse=True)
    elif sort == "y":
        rows.sort(key=lambda row: row[y_field])
    elif sort not in (None, False):
        raise ValueError(f"Unsupported sort: {sort!r}")
    return rows


def _render_bar_chart(spec: Dict[str, Any]) -> str:
    if spec.get("mark") != "bar":
        raise ValueError(f"Unsupported mark: {spec.get('mark')!r}")

    x_field = spec["encoding"]["x"]["field"]
    y_field = spec["encoding"]["y"]["field"]
    rows = _sorted_rows(spec)
    categories = [str(row[x_field]) for row in rows]
    values = [float(row[y_field]) for row in rows]

    width = spec.get("width", CHART_WIDTH)
    height = spec.get("height", CHART_HEIGHT)
    fig = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    ax = fig.add_subplot(1, 1, 1)

    positions = np.arange(len(categories))
    ax.bar(positions, values, color=BAR_COLOR)
    ax.set_xticks(positions)
    ax.set_xticklabels(categories, rotation=45, ha="right", fontsize=9)
    ax.set_xlabel(x_field)
    ax.set_ylabel(y_field)
    ax.grid(True, axis="y", alpha=0.3)
    fig.tight_layout()

    buf = io.BytesIO()
    fig.savefig(
        buf,
        format="svg",
        transparent=spec.get("background") is None,
        metadata={"Date": None},
    )
    return buf.getvalue().decode("utf-8")


def render_chart_svg(spec: Dict[str, Any]) -> Optional[str]:
    """
    Render a bar chart spec to SVG text.

    Returns:
        SVG document, or None if the spec could not be rendered
    """
    try:
        return _render_bar_chart(spec)
    except Exception as e:
        console.warn(f"Could not render comparison chart: {e}")
        return None


def write_chart_svg(svg: str, path: Path) -> Path:
    """Write the rendered chart. I/O errors propagate."""
    path = Path(path)
    path.write_text(svg, encoding="utf-8")
    console.success(path.name)
    return path
