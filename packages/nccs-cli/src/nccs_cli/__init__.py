"""nccs-cli: Command line front end for the nccs build pipeline."""

from __future__ import annotations

__version__ = "0.1.0"
