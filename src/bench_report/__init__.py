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
bench_report - compare k6 load-test results across benchmark scenarios.

Library usage:
    import asyncio
    from bench_report import ReportConfig, generate_report

    config = ReportConfig.from_env("artifacts", prefix="fed-v1-")
    paths = asyncio.run(generate_report(config))
"""

from .chart import build_chart_spec, chart_points, render_chart_svg
from .config import ReportConfig
from .errors import (
    ConfigError,
    MissingCheckError,
    MissingTextSummaryError,
    NoScenariosError,
    ReportError,
    SummaryParseError,
    UploadError,
)
from .loader import ScenarioImages, ScenarioRun, collect_defined, load_scenario, load_scenarios
from .metrics import CheckResult, DerivedMetrics, PerformanceSummary, extract_metrics
from .pipeline import ReportPaths, generate_report
from .publisher import ImagePublisher
from .report import rank_scenarios, render_report
from .scanner import scan_scenario_dirs

__version__ = "1.0.0"
