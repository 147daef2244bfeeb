from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Sequence

from errors import ExternalToolError, ToolNotFoundError
from logging_utils import COMMAND_LOGGER_NAME, get_logger

logger = get_logger(__name__)
command_logger = get_logger(COMMAND_LOGGER_NAME)

STDERR_TAIL_LINES = 50


def resolve_ffmpeg(binary: str = "ffmpeg") -> str:
    """Return an executable path for `binary`, searching PATH for bare names."""
    found = shutil.which(os.path.expanduser(binary))
    if not found:
        raise ToolNotFoundError(binary)
    return found


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(a if " " not in a else f"'{a}'" for a in cmd)


def run_ffmpeg(
    args: Sequence[str],
    *,
    binary: str = "ffmpeg",
    loglevel: str = "error",
    cwd: Path | None = None,
) -> None:
    """Run ffmpeg with the given arguments and wait for it to exit.

    The full command is logged before it starts. A non-zero exit status
    raises ExternalToolError after the tail of ffmpeg's stderr is logged.
    """
    cmd: List[str] = [binary, "-hide_banner", "-loglevel", loglevel, "-nostats"] + list(args)
    command_logger.info("FFmpeg %s", format_command(cmd[1:]))
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(binary) from exc

    if proc.returncode != 0:
        tail = (proc.stderr or "").splitlines()[-STDERR_TAIL_LINES:]
        for line in tail:
            logger.error("ffmpeg: %s", line)
        raise ExternalToolError(proc.returncode, "\n".join(tail) or None)
