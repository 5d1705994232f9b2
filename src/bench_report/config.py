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
Report configuration.

Resolution priority for each setting:
    1. Explicit arguments (CLI flags)
    2. Environment variables
    3. Defaults (artifacts root name, package.json description, "local" run id)

Environment:
    SCENARIO_ARTIFACTS_PREFIX   Required scenario directory prefix
    CF_IMAGES_LINK              Image upload endpoint (optional)
    CF_IMAGES_TOKEN             Bearer token for the endpoint (optional)
    GITHUB_RUN_ID               Run identifier used in uploaded filenames
    REPORT_TITLE                Benchmark family name shown in the header
    REPORT_DESCRIPTION          Benchmark description shown in the header
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_RUN_ID = "local"


@dataclass(frozen=True)
class ReportConfig:
    artifacts_root: Path
    prefix: str
    output_dir: Path
    title: str
    description: str = ""
    images_link: Optional[str] = None
    images_token: Optional[str] = None
    run_id: str = DEFAULT_RUN_ID

    @property
    def upload_enabled(self) -> bool:
        return bool(self.images_link and self.images_token)

    @classmethod
    def from_env(
        cls,
        artifacts_root: Optional[str] = None,
        prefix: Optional[str] = None,
        output_dir: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        run_id: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ReportConfig":
        """
        Build the configuration once at process start.

        Args:
            artifacts_root: Directory holding one sub-directory per scenario
            prefix: Scenario directory prefix
            output_dir: Where result.md, report.vega.json and report.svg go
            title: Benchmark family name
            description: Benchmark description
            run_id: Identifier used to namespace uploaded filenames
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigError: No prefix given and SCENARIO_ARTIFACTS_PREFIX unset
        """
        env = os.environ if environ is None else environ

        root = Path(artifacts_root or os.getcwd())
        prefix = prefix or env.get("SCENARIO_ARTIFACTS_PREFIX")
        if not prefix:
            raise ConfigError(
                "No scenario prefix set. Pass --prefix or set SCENARIO_ARTIFACTS_PREFIX"
            )

        title = title or env.get("REPORT_TITLE") or root.resolve().name
        if description is None:
            description = env.get("REPORT_DESCRIPTION")
        if description is None:
            description = _package_description(root)

        return cls(
            artifacts_root=root,
            prefix=prefix,
            output_dir=Path(output_dir or os.getcwd()),
            title=title,
            description=description,
            images_link=env.get("CF_IMAGES_LINK") or None,
            images_token=env.get("CF_IMAGES_TOKEN") or None,
            run_id=run_id or env.get("GITHUB_RUN_ID") or DEFAULT_RUN_ID,
        )


def _package_description(root: Path) -> str:
    """Read the benchmark description from package.json next to the scenarios."""
    package_file = root / "package.json"
    if not package_file.exists():
        return ""
    try:
        data = json.loads(package_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("description") or "")
