#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for boilersim

Steady-state fire-tube boiler simulator with a typer/rich CLI.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Keep in sync with boilersim/_version.py
VERSION = "0.1.0"

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")
else:
    long_description = "boilersim - steady-state fire-tube boiler simulator"

setup(
    name="boilersim",
    version=VERSION,
    description="Deterministic steady-state fire-tube boiler simulator",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["boilersim", "boilersim.*"]),
    install_requires=[
        "pydantic>=2.0",
        "typer>=0.9",
        "rich>=13.0",
        "PyYAML>=6.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "boilersim=boilersim.cli.main:main",
        ],
    },
)
