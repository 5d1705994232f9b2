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
Pytest configuration and shared fixtures
"""

import json
import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from bench_report.config import ReportConfig


def make_summary(
    rate=42.9,
    p95=120.4,
    avg=80.6,
    med=75.2,
    max_duration=410.5,
    count=2574,
    failed=0,
    http_200_fails=0,
    graphql_fails=0,
    structure_fails=0,
    vus=300,
    time="60s",
):
    """Build a k6 handleSummary-style JSON document."""
    return {
        "metrics": {
            "http_reqs": {
                "type": "counter",
                "contains": "default",
                "values": {"count": count, "rate": rate},
            },
            "http_req_duration": {
                "type": "trend",
                "contains": "time",
                "values": {
                    "avg": avg,
                    "min": 3.1,
                    "med": med,
                    "max": max_duration,
                    "p(90)": p95 - 10,
                    "p(95)": p95,
                },
            },
            "http_req_failed": {
                "type": "rate",
                "contains": "default",
                "values": {"rate": 0.0, "passes": failed, "fails": count - failed},
            },
        },
        "root_group": {
            "name": "",
            "path": "",
            "groups": [],
            "checks": [
                {"name": "response code was 200", "path": "::response code was 200", "passes": count, "fails": http_200_fails},
                {"name": "no graphql errors", "path": "::no graphql errors", "passes": count, "fails": graphql_fails},
                {"name": "valid response structure", "path": "::valid response structure", "passes": count, "fails": structure_fails},
            ],
        },
        "vus": vus,
        "time": time,
    }


K6_TEXT_SUMMARY = """
     checks.........................: 100.00% ✓ 7722      ✗ 0
     http_req_duration..............: avg=80.6ms min=3.1ms med=75.2ms max=410.5ms p(90)=110.4ms p(95)=120.4ms
     http_reqs......................: 2574    42.9/s
"""


def write_scenario(root, dir_name, summary=None, text=K6_TEXT_SUMMARY, images=()):
    """Create one scenario directory the way the load-test job leaves it."""
    path = root / dir_name
    path.mkdir(parents=True, exist_ok=True)
    if summary is not None:
        (path / "k6_summary.json").write_text(json.dumps(summary))
    if text is not None:
        (path / "k6_summary.txt").write_text(text)
    for image in images:
        (path / image).write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return path


@pytest.fixture
def summary_factory():
    """Provide the k6 summary builder."""
    return make_summary


@pytest.fixture
def scenario_factory():
    """Provide the scenario directory builder."""
    return write_scenario


@pytest.fixture
def artifacts_root(tmp_path):
    """Provide an empty artifacts root."""
    root = tmp_path / "artifacts"
    root.mkdir()
    return root


@pytest.fixture
def output_dir(tmp_path):
    """Provide an output directory that does not exist yet."""
    return tmp_path / "out"


@pytest.fixture
def make_config(artifacts_root, output_dir):
    """Build a ReportConfig with injected values, never reading os.environ."""

    def _make(**overrides):
        values = {
            "artifacts_root": artifacts_root,
            "prefix": "gw-",
            "output_dir": output_dir,
            "title": "federation-v1/ramping-vus",
            "description": "Ramping VUs against federated gateways",
        }
        values.update(overrides)
        return ReportConfig(**values)

    return _make


@pytest.fixture
def upload_config(make_config):
    """Config with image upload credentials."""
    return make_config(
        images_link="https://images.example.com/v1",
        images_token="test_token",
        run_id="12345",
    )
