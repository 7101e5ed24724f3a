"""Writing generated files to disk.

The generator never touches the filesystem; this module is the caller side
that persists a rendered file list under an output root, leaving hand-edited
files (``skip_if_exists``) alone once they exist.
"""

from __future__ import annotations

import asyncio
import stat
from dataclasses import dataclass, field
from pathlib import Path

from .models import PlannedFile


@dataclass
class WriteReport:
    """Paths written and paths left untouched by :func:`write_files`."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


async def write_files(files: list[PlannedFile], output_root: str | Path) -> WriteReport:
    """Write rendered files beneath *output_root*.

    Parent directories are created automatically.  A file marked
    ``skip_if_exists`` is never overwritten.  Files marked ``executable`` get
    the executable bits set.

    Raises:
        ValueError: A file in *files* has not been rendered.
    """
    root = Path(output_root)
    report = WriteReport()
    for planned in files:
        if planned.content is None:
            raise ValueError(f"{planned.output_path} has not been rendered")
        target = root / planned.output_path
        if planned.skip_if_exists and target.exists():
            report.skipped.append(target)
            continue
        await asyncio.to_thread(_write_file, target, planned.content, planned.executable)
        report.written.append(target)
    return report


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str, executable: bool) -> None:
    """Synchronous helper: create parent dirs, write content, set mode."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if executable:
        current = path.stat().st_mode
        path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
