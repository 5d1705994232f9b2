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

"""Discover scenario run directories under the artifacts root."""

from pathlib import Path
from typing import Iterable, List

from . import console
from .errors import NoScenariosError

IGNORED_DIRS = frozenset({"node_modules", "services"})


def scan_scenario_dirs(root: Path, prefix: str, ignored: Iterable[str] = IGNORED_DIRS) -> List[str]:
    """
    List scenario directory names under root.

    Raises:
        NoScenariosError: Nothing matched
    """
    ignored = set(ignored)
    root = Path(root)
    console.info(f"Generating report based on artifacts in {root}")

    found = []
    for entry in sorted(root.iterdir()):
        if not entry.is_dir() or entry.name in ignored:
            continue
        if entry.name.startswith(prefix):
            found.append(entry.name)

    console.info(f"Found the following directories to look reports in: {', '.join(found)}")

    if not found:
        raise NoScenariosError(f"No directories found to generate report from in {root} (prefix '{prefix}')")
    return found


def scenario_name(dir_name: str, prefix: str) -> str:
    if dir_name.startswith(prefix):
        return dir_name[len(prefix):]
    return dir_name
