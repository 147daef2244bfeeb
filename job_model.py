"""Immutable description of one concatenation run."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class InputSpec:
    """One input clip. Time values are forwarded to ffmpeg untouched."""

    path: Path
    start_time: Optional[str] = None
    duration: Optional[str] = None
    end_time: Optional[str] = None


@dataclass(frozen=True)
class JobConfig:
    inputs: Tuple[InputSpec, ...]
    output_path: Path

    def __post_init__(self) -> None:
        if not self.inputs:
            raise ValueError("JobConfig requires at least one input")
