#!/usr/bin/env python3
"""Test runner entry points for pytest."""

from __future__ import annotations

import os
import sys

import pytest


# Settings load config/environments/test when collected under this runner
os.environ.setdefault("APP_ENV", "test")


def run_unit() -> int:
    """Run unit tests only."""
    return pytest.main(["-m", "unit", "-v", *sys.argv[1:]])


def run_all() -> int:
    """Run all tests."""
    return pytest.main(["-v", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(run_unit())
