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

"""Tests for ranking and Markdown report assembly"""

import json
from pathlib import Path

import pytest

from bench_report.chart import build_chart_spec, chart_points
from bench_report.loader import ScenarioImages, ScenarioRun
from bench_report.metrics import PerformanceSummary, extract_metrics
from bench_report.report import (
    NO_CHART,
    NO_IMAGE,
    TABLE_COLUMNS,
    markdown_table,
    rank_scenarios,
    render_report,
    scenario_details,
    write_report,
)

HEADER = "| Gateway | duration(p95)⬇️ | RPS | Requests | Durations | Notes |"
ALIGN = "| :--- | :---: | :---: | :---: | :---: | :--- |"


@pytest.fixture
def make_run(summary_factory):
    def _make(name, p95=120.0, text="k6 output", images=None, **summary_kwargs):
        summary = PerformanceSummary.from_dict(summary_factory(p95=p95, **summary_kwargs))
        return ScenarioRun(
            name=name,
            source_path=Path("/artifacts") / f"gw-{name}",
            target_vus=summary.vus,
            duration=summary.time,
            summary=summary,
            metrics=extract_metrics(summary),
            text_summary=text,
            images=images or ScenarioImages(),
        )

    return _make


def table_lines(markdown):
    return [line for line in markdown.splitlines() if line.startswith("|")]


class TestRankScenarios:
    """Test p95 ordering."""

    def test_ascending_p95(self, make_run):
        runs = [make_run("slow", 300), make_run("fast", 90), make_run("mid", 150)]

        assert [r.name for r in rank_scenarios(runs)] == ["fast", "mid", "slow"]

    def test_ties_keep_discovery_order(self, make_run):
        runs = [make_run("b", 120.9), make_run("a", 120.1), make_run("c", 100)]

        assert [r.name for r in rank_scenarios(runs)] == ["c", "b", "a"]

    def test_non_decreasing(self, make_run):
        runs = [make_run(str(i), p95) for i, p95 in enumerate([5, 3, 9, 3, 1, 7])]
        ranked = rank_scenarios(runs)

        p95s = [r.metrics.p95_duration_ms for r in ranked]
        assert p95s == sorted(p95s)


class TestMarkdownTable:
    """Test the fixed-column table renderer."""

    def test_header_and_alignment(self):
        lines = markdown_table([]).splitlines()

        assert lines == [HEADER, ALIGN]

    def test_column_order_ignores_row_order(self):
        row = {"notes": "✅", "gw": "mesh", "rps": 43, "duration": "d", "requests": "r", "p95_duration": "120ms"}

        assert markdown_table([row]).splitlines()[2] == "| mesh | 120ms | 43 | r | d | ✅ |"

    def test_escapes_pipes(self):
        row = dict.fromkeys([key for _, _, key in TABLE_COLUMNS], "")
        row["gw"] = "a|b"

        assert "a\\|b" in markdown_table([row])


class TestRenderReport:
    """Test the assembled document."""

    def test_single_scenario(self, make_run):
        run = make_run("foo", p95=120.0, rate=42.9)

        markdown = render_report([run], "", "federation-v1/ramping-vus", "Ramping VUs")

        assert markdown.startswith("## Overview for: `federation-v1/ramping-vus`")
        assert "Ramping VUs" in markdown
        assert "This scenario was trying to reach 300 concurrent VUs over 60s" in markdown
        lines = table_lines(markdown)
        assert lines[:2] == [HEADER, ALIGN]
        assert len(lines) == 3
        assert lines[2].startswith("| foo | 120ms | 43 | 2574 total, 0 failed |")

    def test_rows_follow_rank(self, make_run):
        ranked = rank_scenarios([make_run("slow", 300), make_run("fast", 90)])

        lines = table_lines(render_report(ranked, "", "t"))

        assert lines[2].startswith("| fast |")
        assert lines[3].startswith("| slow |")

    def test_placeholders_without_urls(self, make_run):
        markdown = render_report([make_run("foo")], "", "t")

        assert NO_CHART in markdown
        assert markdown.count(NO_IMAGE) == 3
        assert "<img" not in markdown

    def test_images_embedded(self, make_run):
        images = ScenarioImages(
            overview_url="https://cdn/o",
            http_url="https://cdn/h",
            containers_url="https://cdn/c",
        )
        markdown = render_report([make_run("foo", images=images)], "https://cdn/chart", "t")

        assert '<img src="https://cdn/chart" alt="Comparison" />' in markdown
        assert '<img src="https://cdn/o" alt="Performance Overview" />' in markdown
        assert '<img src="https://cdn/c" alt="Subgraphs Overview" />' in markdown
        assert '<img src="https://cdn/h" alt="HTTP Overview" />' in markdown
        assert NO_IMAGE not in markdown

    def test_no_description_line(self, make_run):
        markdown = render_report([make_run("foo")], "", "t", "")

        assert markdown.split("\n\n")[1].startswith("This scenario")

    def test_empty_is_rejected(self):
        with pytest.raises(ValueError):
            render_report([], "", "t")


class TestScenarioDetails:
    """Test collapsible per-scenario sections."""

    def test_text_summary_verbatim(self, make_run):
        text = "  http_reqs....: 2574  42.9/s\n  vus..........: 300\n"
        details = scenario_details(make_run("foo", text=text))

        assert details.startswith("<details>\n  <summary>Summary for: `foo`</summary>")
        assert details.rstrip().endswith("</details>")
        assert "```\n" + text.rstrip("\n") + "\n```" in details

    def test_backticks_in_summary_get_longer_fence(self, make_run):
        details = scenario_details(make_run("foo", text="before ``` after"))

        assert "````\nbefore ``` after\n````" in details

    def test_image_order(self, make_run):
        details = scenario_details(make_run("foo"))

        assert details.index("**Performance Overview**") < details.index("**Subgraphs Overview**")
        assert details.index("**Subgraphs Overview**") < details.index("**HTTP Overview**")


class TestWriteReport:
    """Test the output files."""

    def test_writes_markdown_and_spec(self, tmp_path):
        spec = build_chart_spec([("a", 1), ("b", 2)])

        report_path, spec_path = write_report("# report\n", spec, tmp_path / "out")

        assert report_path.read_text(encoding="utf-8") == "# report\n"
        loaded = json.loads(spec_path.read_text(encoding="utf-8"))
        assert chart_points(loaded) == [{"category": "a", "value": 1}, {"category": "b", "value": 2}]
        assert spec_path.read_text(encoding="utf-8").startswith('{\n  "width": 600')
