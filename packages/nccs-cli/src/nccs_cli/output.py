"""Rich console output utilities for nccs-cli.

This module provides formatted console output with Rich,
supporting colored success/error/warning messages and
respecting NO_COLOR environment variable.

Normal output goes to stdout; errors go to stderr.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

# Detect color settings
# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.
        stderr: If True, write to stderr instead of stdout.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        stderr=stderr,
        soft_wrap=True,
    )


# Default console instances
console = create_console()
err_console = create_console(stderr=True)


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Compilation completed successfully.")
        ✓ Compilation completed successfully.
    """
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X to stderr.

    Example:
        >>> error("Compilation failed.")
        ✗ Compilation failed.
    """
    err_console.print(f"[red]✗[/red] {escape(message)}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle.

    Example:
        >>> warning("Multiple project files found")
        ⚠ Multiple project files found
    """
    console.print(f"[yellow]⚠[/yellow] {escape(message)}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, markup=False, highlight=False, **kwargs)


class ConsoleChannel:
    """Output channel writing plain lines to the stdout or stderr console.

    Looks up the module console on every write so ``set_no_color`` and
    test-time console swaps take effect.
    """

    def __init__(self, stderr: bool = False) -> None:
        self.stderr = stderr

    def write_line(self, message: str) -> None:
        target = err_console if self.stderr else console
        target.print(message, markup=False, highlight=False)


def set_no_color(no_color: bool) -> None:
    """Update the global consoles to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console, err_console
    console = create_console(no_color=no_color)
    err_console = create_console(no_color=no_color, stderr=True)
