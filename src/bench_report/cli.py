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
bench-report - compare k6 load-test results across scenarios

Usage:
  bench-report [options] [artifacts_root]

Requires: SCENARIO_ARTIFACTS_PREFIX (or --prefix)
Optional: CF_IMAGES_LINK + CF_IMAGES_TOKEN to upload charts, GITHUB_RUN_ID
"""

import argparse
import asyncio
import sys

import aiohttp

from . import console
from .config import ReportConfig
from .errors import ConfigError, ReportError
from .pipeline import generate_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bench-report",
        description="Build a Markdown comparison report from k6 scenario artifacts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -p fed-v1- ./artifacts          Compare every fed-v1-* scenario
  %(prog)s -p gw- -o ./out .               Write result.md etc. to ./out
  %(prog)s -p gw- -t "federation-v1/ramping-vus" artifacts
        """
    )
    parser.add_argument("artifacts_root", nargs="?", help="Directory with one sub-directory per scenario (default: cwd)")
    parser.add_argument("-p", "--prefix", help="Scenario directory prefix (or set SCENARIO_ARTIFACTS_PREFIX)")
    parser.add_argument("-o", "--output-dir", help="Where to write result.md, report.vega.json, report.svg (default: cwd)")
    parser.add_argument("-t", "--title", help="Benchmark name shown in the report header")
    parser.add_argument("-d", "--description", help="Benchmark description (default: package.json description)")
    parser.add_argument("-r", "--run-id", help="Run identifier for uploaded filenames (or set GITHUB_RUN_ID)")
    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = ReportConfig.from_env(
            artifacts_root=args.artifacts_root,
            prefix=args.prefix,
            output_dir=args.output_dir,
            title=args.title,
            description=args.description,
            run_id=args.run_id,
        )
    except ConfigError as e:
        console.error(str(e))
        return 2

    try:
        paths = asyncio.run(generate_report(config))
    except ReportError as e:
        console.error(str(e))
        return 1
    except aiohttp.ClientError as e:
        console.error(f"Network error - {e}")
        return 1
    except OSError as e:
        console.error(f"I/O error - {e}")
        return 1

    console.info(f"Generated {paths.report}")
    return 0


def cli_main():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
