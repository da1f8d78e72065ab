"""Shared testing infrastructure for nccs.

This package provides reusable test fixtures for testing across all
nccs packages.

Modules:
    fixtures: Fake compilation engine and canned compilation results

Usage:
    In your conftest.py:
        from testing.fixtures import FakeEngine
"""

from __future__ import annotations
