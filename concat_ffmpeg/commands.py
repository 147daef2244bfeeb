"""ffmpeg argument builders for the two concat stages.

Stage 1 re-muxes each (optionally trimmed) input into an MPEG-TS stream with
Annex B H.264, which can be joined byte-wise. Stage 2 reads those streams
through the `concat:` protocol and muxes them into a faststart MP4.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from job_model import InputSpec

CONCAT_PROTOCOL = "concat:"
CONCAT_SEPARATOR = "|"


def build_segment_args(spec: InputSpec, temp_path: Path) -> List[str]:
    args: List[str] = []
    if spec.start_time:
        args += ["-ss", spec.start_time]
    if spec.duration:
        args += ["-t", spec.duration]
    if spec.end_time:
        args += ["-to", spec.end_time]
    args += [
        "-i",
        str(spec.path),
        "-c",
        "copy",
        "-bsf:v",
        "h264_mp4toannexb",
        "-f",
        "mpegts",
        str(temp_path),
        "-y",
    ]
    return args


def concat_source(segments: Sequence[Path]) -> str:
    if not segments:
        raise ValueError("concat: no segments provided")
    return CONCAT_PROTOCOL + CONCAT_SEPARATOR.join(str(p) for p in segments)


def build_concat_args(segments: Sequence[Path], output: Path) -> List[str]:
    return [
        "-i",
        concat_source(segments),
        "-c",
        "copy",
        "-bsf:a",
        "aac_adtstoasc",
        "-movflags",
        "faststart",
        "-f",
        "mp4",
        str(output),
    ]
