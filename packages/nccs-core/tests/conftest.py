"""Shared pytest fixtures for nccs-core tests.

Provides a fake compilation engine, in-memory channels and helpers for
building source trees on disk.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from nccs_core.channels import BufferChannel
from testing.fixtures import FakeEngine

CONTRACT_SOURCE = """using Neo.SmartContract.Framework;

public class Contract2 : SmartContract
{
    public static string Main() => "hello";
}
"""


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def engine() -> FakeEngine:
    """Return a fake engine producing successful results."""
    return FakeEngine()


@pytest.fixture
def out() -> BufferChannel:
    """Return an in-memory standard output channel."""
    return BufferChannel()


@pytest.fixture
def err() -> BufferChannel:
    """Return an in-memory error channel."""
    return BufferChannel()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture creating files below tmp_path.

    Returns:
        Function taking relative file names and returning tmp_path.

    Example:
        >>> make_tree("Token.cs", "obj/Generated.cs")
    """

    def _make(*names: str, content: str = CONTRACT_SOURCE) -> Path:
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _make
