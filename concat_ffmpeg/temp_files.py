from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Type

from logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TempStreamHandle:
    """A uniquely named intermediate stream file owned by one run."""

    path: Path

    def remove(self) -> None:
        self.path.unlink(missing_ok=True)


class TempStreamSet:
    """Allocates temp stream files and deletes every one of them on exit.

    Cleanup never raises: a failed deletion is logged and the remaining
    files are still removed.
    """

    def __init__(self, directory: Optional[Path] = None, suffix: str = ".ts", prefix: str = "catmp4_") -> None:
        self.directory = directory
        self.suffix = suffix
        self.prefix = prefix
        self.handles: List[TempStreamHandle] = []

    def allocate(self) -> TempStreamHandle:
        if self.directory is not None:
            self.directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            suffix=self.suffix,
            prefix=self.prefix,
            dir=str(self.directory) if self.directory else None,
        )
        os.close(fd)
        handle = TempStreamHandle(Path(name))
        self.handles.append(handle)
        logger.debug("Allocated temp stream %s", handle.path)
        return handle

    @property
    def paths(self) -> List[Path]:
        return [h.path for h in self.handles]

    def cleanup(self) -> None:
        for handle in self.handles:
            try:
                handle.remove()
            except OSError as exc:
                logger.debug("Could not remove temp stream %s: %s", handle.path, exc)
        self.handles.clear()

    def __enter__(self) -> "TempStreamSet":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.cleanup()
