"""daynotes - daily and general notes kept as plain text files.

This package provides the core functionality for the `notes` command-line tool,
including daily note generation with section carryover, general notes with
tags, and simple browsing helpers.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.4.0"
