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
End-to-end report generation.

    scan -> load (concurrent) -> publish scenario images (concurrent)
         -> rank -> chart spec -> render/publish chart -> write report

No file is written until every scenario has loaded, so a fatal load
error leaves the output directory untouched.
"""

import asyncio
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from . import console
from .chart import build_chart_spec, render_chart_svg, write_chart_svg
from .config import ReportConfig
from .errors import NoScenariosError
from .loader import load_scenarios
from .publisher import ImagePublisher
from .report import CHART_SVG_FILE, rank_scenarios, render_report, write_report
from .scanner import scan_scenario_dirs


@dataclass(frozen=True)
class ReportPaths:
    report: Path
    chart_spec: Path
    chart_svg: Optional[Path]
    chart_url: str


async def generate_report(config: ReportConfig, publisher: Optional[ImagePublisher] = None) -> ReportPaths:
    """
    Generate result.md, report.vega.json and report.svg for one artifacts tree.

    Raises:
        NoScenariosError: No scenario directories, or none with a usable summary
        MissingTextSummaryError: A scenario has JSON but no text summary
        MissingCheckError: A summary lacks a required check
        UploadError: The image store rejected an upload
    """
    publisher = publisher or ImagePublisher(config)

    dir_names = scan_scenario_dirs(config.artifacts_root, config.prefix)
    runs = await load_scenarios(config.artifacts_root, dir_names, config.prefix)
    if not runs:
        raise NoScenariosError(f"None of {len(dir_names)} scenario directories had a usable summary")
    console.info(f"Loaded {len(runs)} scenarios: {', '.join(run.name for run in runs)}")

    images = await asyncio.gather(*(publisher.publish_scenario_images(run) for run in runs))
    runs = [replace(run, images=run_images) for run, run_images in zip(runs, images)]

    ranked = rank_scenarios(runs)
    chart_spec = build_chart_spec([(run.name, run.metrics.p95_duration_ms) for run in ranked])

    config.output_dir.mkdir(parents=True, exist_ok=True)
    chart_svg = None
    chart_url = ""
    svg = render_chart_svg(chart_spec)
    if svg is not None:
        chart_svg = write_chart_svg(svg, config.output_dir / CHART_SVG_FILE)
        chart_url = await publisher.publish("report", chart_svg)

    markdown = render_report(ranked, chart_url, config.title, config.description)
    report_path, spec_path = write_report(markdown, chart_spec, config.output_dir)

    return ReportPaths(
        report=report_path,
        chart_spec=spec_path,
        chart_svg=chart_svg,
        chart_url=chart_url,
    )
