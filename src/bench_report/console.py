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

"""Console output helpers: progress and warnings on stdout, errors on stderr."""

import sys

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"


def info(message: str) -> None:
    print(message)


def success(message: str) -> None:
    print(f"{GREEN}✓ {message}{RESET}")


def warn(message: str) -> None:
    print(f"{YELLOW}Warning: {message}{RESET}")


def error(message: str) -> None:
    print(f"{RED}Error: {message}{RESET}", file=sys.stderr)
