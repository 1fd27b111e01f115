from __future__ import annotations

import asyncio
import logging
import shlex
from pathlib import Path

from daynotes.core.result import EditorError

logger = logging.getLogger(__name__)


async def launch_editor(editor_cmd: list[str], note_path: Path) -> int:
    """Launch the configured editor asynchronously."""
    proc = await asyncio.create_subprocess_exec(*editor_cmd, str(note_path))
    return await proc.wait()


def open_in_editor(editor: str, note_path: Path) -> int:
    """Open ``note_path`` in ``editor`` and block until the editor exits."""
    editor_cmd = shlex.split(editor)
    if not editor_cmd:
        raise EditorError("No editor configured.")

    logger.debug("Opening %s with %s", note_path, editor_cmd)
    try:
        return asyncio.run(launch_editor(editor_cmd, note_path))
    except FileNotFoundError as exc:
        raise EditorError(f"Editor not found: {editor}") from exc
