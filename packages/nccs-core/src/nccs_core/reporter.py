"""Diagnostic reporting.

Routes engine diagnostics to the error channel (error severity) or the
output channel (everything else), in the order the engine emitted them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from nccs_core.models import Diagnostic, DiagnosticSeverity

if TYPE_CHECKING:
    from nccs_core.channels import OutputChannel

logger = structlog.get_logger(__name__)


def count_by_severity(diagnostics: Iterable[Diagnostic], severity: DiagnosticSeverity) -> int:
    return sum(1 for d in diagnostics if d.severity is severity)


class DiagnosticReporter:
    """Write diagnostics to the output and error channels.

    Example:
        >>> reporter = DiagnosticReporter(out=StreamChannel.stdout(), err=StreamChannel.stderr())
        >>> reporter.report(result.diagnostics)
    """

    def __init__(self, out: OutputChannel, err: OutputChannel) -> None:
        self.out = out
        self.err = err

    def report(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Report every diagnostic once, preserving order.

        Args:
            diagnostics: Diagnostics in emission order.
        """
        reported = list(diagnostics)
        for diagnostic in reported:
            channel = self.err if diagnostic.is_error else self.out
            channel.write_line(str(diagnostic))

        logger.debug(
            "diagnostics_reported",
            total=len(reported),
            errors=count_by_severity(reported, DiagnosticSeverity.ERROR),
            warnings=count_by_severity(reported, DiagnosticSeverity.WARNING),
        )
