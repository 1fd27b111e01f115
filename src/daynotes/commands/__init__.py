"""CLI command modules for the notes tool.

This package contains all user-facing CLI commands organized by domain:
    - daily: Daily notes (open, list, search, calendar, archive, summary)
    - general: Titled notes with tags
    - init: Interactive configuration setup
"""

from __future__ import annotations

from . import daily, general, init

__all__ = [
    "daily",
    "general",
    "init",
]
