"""Shared test fixtures for nccs packages.

Exports:
    Engine fixtures:
        FakeEngine: In-memory CompilationEngine recording every call
        UnreachableEngine: Engine raising ConnectionError on every call
        FakeCompilationResult: Canned CompilationResult
        make_failed_result: Factory for an unsuccessful result
        make_manifest: Factory for manifest documents
        make_debug_info: Factory for debug information documents

Usage:
    ```python
    from testing.fixtures import FakeEngine

    @pytest.fixture
    def engine() -> FakeEngine:
        return FakeEngine()
    ```
"""

from __future__ import annotations

from testing.fixtures.engine import (
    EngineCall,
    FakeCompilationResult,
    FakeEngine,
    UnreachableEngine,
    make_debug_info,
    make_failed_result,
    make_manifest,
)

__all__ = [
    "EngineCall",
    "FakeCompilationResult",
    "FakeEngine",
    "UnreachableEngine",
    "make_debug_info",
    "make_failed_result",
    "make_manifest",
]
