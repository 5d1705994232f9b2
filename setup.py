#!/usr/bin/env python3
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
Setup script for bench-report
"""

from setuptools import setup, find_packages

setup(
    name="bench-report",
    version="1.0.0",
    description="Compare k6 load-test results across benchmark scenarios in one Markdown report",
    long_description="Aggregates per-scenario k6 summaries into a ranked Markdown report with a comparison chart",
    author="unsandbox.com",
    license="Public Domain",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "aiohttp>=3.8.0",
        "matplotlib>=3.5",
        "numpy>=1.21",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.20.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bench-report=bench_report.cli:cli_main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Public Domain License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Testing",
        "Topic :: System :: Benchmark",
    ],
)
