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
k6 summary models and derived metrics.

Only the fields the report consumes are declared. Everything else in the
k6 summary JSON is ignored.

Consumed k6 summary layout:
    metrics.http_reqs.values.{count, rate}
    metrics.http_req_duration.values.{avg, med, max, p(95)}
    metrics.http_req_failed.values.passes
    root_group.checks: [{name, passes, fails}, ...]
    vus, time (added by the scenario's handleSummary)
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .errors import MissingCheckError, SummaryParseError

PASS_MARK = "✅"
FAIL_MARK = "❌"

CHECK_HTTP_200 = "response code was 200"
CHECK_NO_GRAPHQL_ERRORS = "no graphql errors"
CHECK_RESPONSE_STRUCTURE = "valid response structure"


@dataclass(frozen=True)
class CheckResult:
    name: str
    passes: int
    fails: int


@dataclass(frozen=True)
class PerformanceSummary:
    request_count: int
    request_rate: float
    duration_avg: float
    duration_med: float
    duration_p95: float
    duration_max: float
    failed_requests: int
    vus: Any
    time: Any
    checks: Sequence[CheckResult] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceSummary":
        """
        Build a summary from parsed k6 JSON.

        Raises:
            SummaryParseError: A required metric field is missing or not numeric
        """
        if not isinstance(data, dict):
            raise SummaryParseError("summary is not a JSON object")

        metrics = data.get("metrics")
        if not isinstance(metrics, dict):
            raise SummaryParseError("missing 'metrics'")

        for key in ("vus", "time"):
            if key not in data:
                raise SummaryParseError(f"missing '{key}'")

        return cls(
            request_count=int(_metric_value(metrics, "http_reqs", "count")),
            request_rate=_metric_value(metrics, "http_reqs", "rate"),
            duration_avg=_metric_value(metrics, "http_req_duration", "avg"),
            duration_med=_metric_value(metrics, "http_req_duration", "med"),
            duration_p95=_metric_value(metrics, "http_req_duration", "p(95)"),
            duration_max=_metric_value(metrics, "http_req_duration", "max"),
            failed_requests=int(_metric_value(metrics, "http_req_failed", "passes")),
            vus=data["vus"],
            time=data["time"],
            checks=_parse_checks(data.get("root_group")),
        )


@dataclass(frozen=True)
class DerivedMetrics:
    rps: int
    p95_duration_ms: int
    avg_ms: int
    med_ms: int
    p95_ms: int
    max_ms: int
    total_requests: int
    failed_requests: int
    http_200_check: CheckResult
    graphql_errors_check: CheckResult
    response_structure_check: CheckResult
    notes: str

    @property
    def durations(self) -> str:
        return (
            f"avg: {self.avg_ms}ms, p95: {self.p95_ms}ms, "
            f"max: {self.max_ms}ms, med: {self.med_ms}ms"
        )

    @property
    def requests(self) -> str:
        return f"{self.total_requests} total, {self.failed_requests} failed"


def _metric_value(metrics: Dict[str, Any], metric: str, key: str) -> float:
    entry = metrics.get(metric)
    if not isinstance(entry, dict):
        raise SummaryParseError(f"missing metric '{metric}'")
    # k6 --summary-export writes values inline, handleSummary nests them
    values = entry.get("values", entry)
    value = values.get(key) if isinstance(values, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SummaryParseError(f"missing numeric '{metric}.{key}'")
    return float(value)


def _parse_checks(root_group: Optional[Dict[str, Any]]) -> List[CheckResult]:
    if not isinstance(root_group, dict):
        return []
    raw = root_group.get("checks") or []
    if isinstance(raw, dict):
        # Older k6 versions key checks by name
        raw = [
            dict(entry, name=entry.get("name", name))
            for name, entry in raw.items()
            if isinstance(entry, dict)
        ]
    elif not isinstance(raw, list):
        raise SummaryParseError(f"'root_group.checks' must be a list or object, got {type(raw).__name__}")

    checks = []
    for entry in raw:
        if not isinstance(entry, dict) or "name" not in entry:
            continue
        checks.append(
            CheckResult(
                name=entry["name"],
                passes=_check_count(entry, "passes"),
                fails=_check_count(entry, "fails"),
            )
        )
    return checks


def _check_count(entry: Dict[str, Any], key: str) -> int:
    value = entry.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SummaryParseError(f"non-numeric '{key}' for check '{entry['name']}'")
    return int(value)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, like the k6 dashboards do."""
    return int(math.floor(value + 0.5))


def find_check(checks: Sequence[CheckResult], name: str, source: Optional[str] = None) -> CheckResult:
    """
    Look up a check by exact name.

    Raises:
        MissingCheckError: No check with that name exists
    """
    for check in checks:
        if check.name == name:
            return check
    raise MissingCheckError(name, source)


def build_notes(
    failed_requests: int,
    http_200: CheckResult,
    graphql_errors: CheckResult,
    response_structure: CheckResult,
) -> str:
    notes = []
    if failed_requests > 0:
        notes.append(f"{failed_requests} failed requests")
    if http_200.fails > 0:
        notes.append(f"{http_200.fails} non-200 responses")
    if graphql_errors.fails > 0:
        notes.append(f"{graphql_errors.fails} unexpected GraphQL errors")
    if response_structure.fails > 0:
        notes.append(f"non-compatible response structure ({response_structure.fails})")

    if not notes:
        return PASS_MARK
    return f"{FAIL_MARK} " + ", ".join(notes)


def extract_metrics(summary: PerformanceSummary, source: Optional[str] = None) -> DerivedMetrics:
    """
    Compute the ranking and display metrics for one scenario.

    Args:
        summary: Parsed k6 summary
        source: Where the summary came from, used in error messages

    Returns:
        DerivedMetrics

    Raises:
        MissingCheckError: One of the three required checks is absent
    """
    http_200 = find_check(summary.checks, CHECK_HTTP_200, source)
    graphql_errors = find_check(summary.checks, CHECK_NO_GRAPHQL_ERRORS, source)
    response_structure = find_check(summary.checks, CHECK_RESPONSE_STRUCTURE, source)

    return DerivedMetrics(
        rps=round_half_up(summary.request_rate),
        p95_duration_ms=int(math.floor(summary.duration_p95)),
        avg_ms=round_half_up(summary.duration_avg),
        med_ms=round_half_up(summary.duration_med),
        p95_ms=round_half_up(summary.duration_p95),
        max_ms=round_half_up(summary.duration_max),
        total_requests=summary.request_count,
        failed_requests=summary.failed_requests,
        http_200_check=http_200,
        graphql_errors_check=graphql_errors,
        response_structure_check=response_structure,
        notes=build_notes(summary.failed_requests, http_200, graphql_errors, response_structure),
    )
