"""Shared test fixtures for nccs-cli tests.

Provides CliRunner fixtures, a fake compilation engine and helpers for
laying out contract sources in an isolated filesystem.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from testing.fixtures import FakeCompilationResult, FakeEngine

CONTRACT_SOURCE = """using Neo.SmartContract.Framework;

public class Contract2 : SmartContract
{
    public static string Main() => "hello";
}
"""


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear NCCS_ variables so host settings cannot leak in."""
    for name in ("NCCS_ENGINE", "NCCS_ADDRESS_VERSION", "NCCS_LOG_LEVEL", "NCCS_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def engine() -> FakeEngine:
    """Return a fake engine naming its contract ``ContractTest``."""
    return FakeEngine(result_factory=lambda: FakeCompilationResult(contract_name="ContractTest"))


@pytest.fixture
def create_sources(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture creating files in the isolated filesystem.

    Returns:
        Function taking relative file names and returning the working directory.
    """

    def _create(*names: str, content: str = CONTRACT_SOURCE) -> Path:
        for name in names:
            path = Path(name)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return Path.cwd()

    return _create
