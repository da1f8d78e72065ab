"""Custom exception hierarchy for nccs-core.

This module defines the exception classes raised by the build pipeline:
- NccsError: Base exception for all nccs errors
- InputValidationError: A named input path is missing or has the wrong extension
- NoSourceFoundError: A scanned directory holds nothing to build
- CompilationFailure: The engine reported an unsuccessful compilation
- ArtifactWriteError: An output folder, file or archive could not be written
- EngineUnavailableError: The compilation engine could not be loaded or reached

Every error carries the process exit code it maps to, so the CLI boundary
never has to inspect error types to pick one.

User-facing messages are safe to display; technical details are
logged internally via structlog and never shown to the user.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_NO_SOURCE = 2


class NccsError(Exception):
    """Base exception for nccs.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never exposed to the user.

    Example:
        >>> raise NccsError(
        ...     "Engine could not be loaded",
        ...     internal_details="ModuleNotFoundError: No module named 'neo_engine'",
        ... )
    """

    exit_code: int = EXIT_FAILURE

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize NccsError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "nccs_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class InputValidationError(NccsError):
    """Raised when an explicitly named input path is unusable.

    Use this exception when:
    - A named file does not carry the source-file extension
    - A named file does not exist

    Attributes:
        path: The offending path, when known.
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.path = path


class NoSourceFoundError(NccsError):
    """Raised when a scanned directory has no project descriptor and no sources.

    Maps to a distinct exit code so callers can tell "nothing to build"
    apart from "build failed".

    Attributes:
        directory: The directory that was scanned.
    """

    exit_code = EXIT_NO_SOURCE

    def __init__(self, directory: str, *, internal_details: str | None = None) -> None:
        super().__init__(
            f'No .cs file is found in "{directory}".',
            internal_details=internal_details,
        )
        self.directory = directory


class CompilationFailure(NccsError):
    """Raised when the engine returned an unsuccessful result.

    The diagnostics explain the cause and have already been reported by
    the time this is raised.
    """

    def __init__(self, user_message: str = "Compilation failed.") -> None:
        super().__init__(user_message)


class ArtifactWriteError(NccsError):
    """Raised when an output folder, artifact file or archive cannot be written.

    Artifacts that were fully written before the failure stay on disk.

    Attributes:
        path: The path that failed to write.
    """

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        super().__init__(f"Cannot write to: {path}", internal_details=internal_details)
        self.path = path


class EngineUnavailableError(NccsError):
    """Raised when the compilation engine cannot be loaded or invoked.

    Fatal and never retried.
    """

    pass
