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
Assemble the Markdown comparison report.

Layout of result.md:

    ## Overview for: `<title>`
    <description>
    This scenario was trying to reach N concurrent VUs over T
    ### Comparison
    <chart or **no-chart-available**>
    | Gateway | duration(p95)⬇️ | RPS | Requests | Durations | Notes |
    <details> per scenario: k6 text output + three chart images
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from . import console
from .loader import ScenarioRun

REPORT_FILE = "result.md"
CHART_SPEC_FILE = "report.vega.json"
CHART_SVG_FILE = "report.svg"

NO_CHART = "**no-chart-available**"
NO_IMAGE = "**no-image-available**"

LEFT = "left"
CENTER = "center"

# (header, alignment, row key)
TABLE_COLUMNS: List[Tuple[str, str, str]] = [
    ("Gateway", LEFT, "gw"),
    ("duration(p95)⬇️", CENTER, "p95_duration"),
    ("RPS", CENTER, "rps"),
    ("Requests", CENTER, "requests"),
    ("Durations", CENTER, "duration"),
    ("Notes", LEFT, "notes"),
]

_ALIGN_MARKERS = {
    LEFT: ":---",
    CENTER: ":---:",
}


def rank_scenarios(runs: Sequence[ScenarioRun]) -> List[ScenarioRun]:
    """Order by ascending p95; sorted() is stable so ties keep discovery order."""
    return sorted(runs, key=lambda run: run.metrics.p95_duration_ms)


def _escape_cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def markdown_table(rows: Sequence[Dict[str, Any]], columns: Sequence[Tuple[str, str, str]] = TABLE_COLUMNS) -> str:
    """Render rows as a Markdown table; column order comes from columns, never from the rows."""
    lines = [
        "| " + " | ".join(header for header, _, _ in columns) + " |",
        "| " + " | ".join(_ALIGN_MARKERS[align] for _, align, _ in columns) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_escape_cell(row.get(key, "")) for _, _, key in columns) + " |")
    return "\n".join(lines)


def table_row(run: ScenarioRun) -> Dict[str, Any]:
    metrics = run.metrics
    return {
        "gw": run.name,
        "p95_duration": f"{metrics.p95_duration_ms}ms",
        "rps": metrics.rps,
        "requests": metrics.requests,
        "duration": metrics.durations,
        "notes": metrics.notes,
    }


def details_block(title: str, content: str) -> str:
    return f"""<details>
  <summary>{title}</summary>

  {content}
  </details>"""


def image_or_placeholder(url: str, alt: str, placeholder: str = NO_IMAGE) -> str:
    if url:
        return f'<img src="{url}" alt="{alt}" />'
    return placeholder


def _code_fence(text: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    return "`" * max(3, longest + 1)


def scenario_details(run: ScenarioRun) -> str:
    fence = _code_fence(run.text_summary)
    content = "\n".join([
        "**K6 Output**",
        "",
        fence,
        run.text_summary.rstrip("\n"),
        fence,
        "",
        "**Performance Overview**",
        "",
        image_or_placeholder(run.images.overview_url, "Performance Overview"),
        "",
        "**Subgraphs Overview**",
        "",
        image_or_placeholder(run.images.containers_url, "Subgraphs Overview"),
        "",
        "**HTTP Overview**",
        "",
        image_or_placeholder(run.images.http_url, "HTTP Overview"),
        "",
    ])
    return details_block(f"Summary for: `{run.name}`", content)


def render_report(
    ranked: Sequence[ScenarioRun],
    chart_url: str,
    title: str,
    description: str = "",
) -> str:
    """
    Build the report document.

    Args:
        ranked: Scenarios already ordered by rank_scenarios()
        chart_url: Public URL of the comparison chart, "" for none
        title: Benchmark family shown in the header
        description: Free text shown under the header

    Returns:
        Markdown text
    """
    if not ranked:
        raise ValueError("Cannot render a report without scenarios")

    top = ranked[0]
    blocks = [f"## Overview for: `{title}`"]
    if description:
        blocks.append(description)
    blocks.extend([
        f"This scenario was trying to reach {top.target_vus} concurrent VUs over {top.duration}",
        "### Comparison",
        image_or_placeholder(chart_url, "Comparison", placeholder=NO_CHART),
        markdown_table([table_row(run) for run in ranked]),
        "\n\n".join(scenario_details(run) for run in ranked),
    ])
    return "\n\n".join(blocks) + "\n"


def write_report(markdown: str, chart_spec: Dict[str, Any], output_dir: Path) -> Tuple[Path, Path]:
    """Write result.md and report.vega.json into output_dir."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / REPORT_FILE
    report_path.write_text(markdown, encoding="utf-8")
    console.success(REPORT_FILE)

    spec_path = output_dir / CHART_SPEC_FILE
    spec_path.write_text(json.dumps(chart_spec, indent=2, ensure_ascii=False), encoding="utf-8")
    console.success(CHART_SPEC_FILE)

    return report_path, spec_path
