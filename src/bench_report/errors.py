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
Exceptions raised while building a benchmark comparison report.

Everything derives from ReportError so the CLI can catch one type.
SummaryParseError is the only soft one: the loader turns it into a
skipped scenario. The rest abort the run.
"""

from pathlib import Path
from typing import Optional


class ReportError(Exception):
    """Base class for report generation failures."""
    pass


class ConfigError(ReportError):
    """Raised when required configuration is missing or invalid."""
    pass


class NoScenariosError(ReportError):
    """Raised when no scenario directories (or no valid summaries) are found."""
    pass


class SummaryParseError(ReportError):
    """Raised when a k6 JSON summary lacks a required field or has the wrong shape."""
    pass


class MissingTextSummaryError(ReportError):
    """Raised when a scenario has a JSON summary but no text summary."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Missing text summary: {path}")


class MissingCheckError(ReportError):
    """Raised when a required named check is absent from a summary."""

    def __init__(self, name: str, source: Optional[str] = None):
        self.name = name
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Required check '{name}' not found{where}")


class UploadError(ReportError):
    """Raised when the image store rejects an upload."""

    def __init__(self, filename: str, status: Optional[int], reason: Optional[str] = None):
        self.filename = filename
        self.status = status
        self.reason = reason
        detail = f"HTTP {status} {reason or ''}" if status is not None else (reason or "")
        super().__init__(f"Failed to upload {filename} to image store: {detail}".rstrip())
