"""Unit tests for nccs_core.errors."""

from __future__ import annotations

import pytest

from nccs_core.errors import (
    EXIT_FAILURE,
    EXIT_NO_SOURCE,
    ArtifactWriteError,
    CompilationFailure,
    EngineUnavailableError,
    InputValidationError,
    NccsError,
    NoSourceFoundError,
)


class TestNccsError:
    """Tests for the NccsError base class."""

    def test_user_message(self) -> None:
        """Test that the user message is the string form."""
        err = NccsError("Something went wrong")
        assert err.user_message == "Something went wrong"
        assert str(err) == "Something went wrong"

    def test_internal_details_are_logged_not_shown(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that internal details reach the log but not the message."""
        err = NccsError("Engine failed", internal_details="socket /run/engine.sock refused")
        assert "socket" not in str(err)
        captured = capsys.readouterr()
        assert "socket /run/engine.sock refused" in captured.out + captured.err

    @pytest.mark.parametrize(
        "error_type",
        [
            InputValidationError,
            NoSourceFoundError,
            CompilationFailure,
            ArtifactWriteError,
            EngineUnavailableError,
        ],
    )
    def test_hierarchy(self, error_type: type[NccsError]) -> None:
        """Test that every error derives from NccsError."""
        assert issubclass(error_type, NccsError)


class TestExitCodes:
    """Tests for per-error exit codes."""

    def test_no_source_is_distinct(self) -> None:
        """Test that an empty directory maps to exit code 2."""
        err = NoSourceFoundError("/work")
        assert err.exit_code == EXIT_NO_SOURCE
        assert err.user_message == 'No .cs file is found in "/work".'

    def test_other_errors_are_generic(self) -> None:
        """Test that remaining errors map to exit code 1."""
        assert InputValidationError("bad").exit_code == EXIT_FAILURE
        assert CompilationFailure().exit_code == EXIT_FAILURE
        assert ArtifactWriteError("/out").exit_code == EXIT_FAILURE
        assert EngineUnavailableError("gone").exit_code == EXIT_FAILURE

    def test_compilation_failure_message(self) -> None:
        """Test the default compilation failure message."""
        assert CompilationFailure().user_message == "Compilation failed."

    def test_write_error_names_path(self) -> None:
        """Test that write errors name the path."""
        err = ArtifactWriteError("/out/Token.nef")
        assert err.path == "/out/Token.nef"
        assert "/out/Token.nef" in err.user_message
