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
Load k6 summaries for each scenario directory.

Each scenario directory is expected to hold:
    k6_summary.json   required, or the scenario is skipped with a warning
    k6_summary.txt    required whenever the JSON exists
    overview.png, http.png, containers.png   optional chart images
"""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, TypeVar

from . import console
from .errors import MissingTextSummaryError, SummaryParseError
from .metrics import DerivedMetrics, PerformanceSummary, extract_metrics
from .scanner import scenario_name

JSON_SUMMARY_FILE = "k6_summary.json"
TEXT_SUMMARY_FILE = "k6_summary.txt"

T = TypeVar("T")


@dataclass(frozen=True)
class ScenarioImages:
    overview_url: str = ""
    http_url: str = ""
    containers_url: str = ""


@dataclass(frozen=True)
class ScenarioRun:
    name: str
    source_path: Path
    target_vus: Any
    duration: Any
    summary: PerformanceSummary
    metrics: DerivedMetrics
    text_summary: str
    images: ScenarioImages = field(default_factory=ScenarioImages)


def collect_defined(values: Iterable[Optional[T]]) -> List[T]:
    """Drop None entries, keeping the order of the rest."""
    return [value for value in values if value is not None]


async def load_scenario(root: Path, dir_name: str, prefix: str) -> Optional[ScenarioRun]:
    """
    Load one scenario directory.

    Returns:
        ScenarioRun, or None when the JSON summary is absent or unusable

    Raises:
        MissingTextSummaryError: JSON summary exists but the text summary does not
        MissingCheckError: A required check is absent from the summary
    """
    full_path = Path(root) / dir_name
    json_path = full_path / JSON_SUMMARY_FILE

    if not json_path.exists():
        console.warn(f"Could not find {JSON_SUMMARY_FILE} in {full_path}! Skipping...")
        return None

    try:
        raw = json.loads(json_path.read_text(encoding="utf-8"))
        summary = PerformanceSummary.from_dict(raw)
    except (OSError, UnicodeDecodeError) as e:
        console.warn(f"Could not read {json_path}: {e}. Skipping...")
        return None
    except (json.JSONDecodeError, SummaryParseError) as e:
        console.warn(f"Could not parse {json_path}: {e}. Skipping...")
        return None

    text_path = full_path / TEXT_SUMMARY_FILE
    if not text_path.exists():
        raise MissingTextSummaryError(text_path)
    text_summary = text_path.read_text(encoding="utf-8")

    return ScenarioRun(
        name=scenario_name(dir_name, prefix),
        source_path=full_path,
        target_vus=summary.vus,
        duration=summary.time,
        summary=summary,
        metrics=extract_metrics(summary, source=str(json_path)),
        text_summary=text_summary,
    )


async def load_scenarios(root: Path, dir_names: Iterable[str], prefix: str) -> List[ScenarioRun]:
    """Load all scenario directories concurrently, dropping skipped ones."""
    results = await asyncio.gather(
        *(load_scenario(root, dir_name, prefix) for dir_name in dir_names)
    )
    return collect_defined(results)
