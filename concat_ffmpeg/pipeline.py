from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from config_loader import AppConfig
from errors import ExternalToolError
from job_model import JobConfig
from logging_utils import get_logger

from .commands import build_concat_args, build_segment_args
from .runner import resolve_ffmpeg, run_ffmpeg
from .temp_files import TempStreamSet

logger = get_logger(__name__)

Runner = Callable[..., None]


@dataclass
class ConcatResult:
    output_path: Path
    segment_count: int


class ConcatPipeline:
    """Trim every input into a temp stream, then join the streams into one MP4.

    Inputs are processed one at a time in command-line order; the final
    concat only starts once every segment has been written.
    """

    def __init__(self, config: Optional[AppConfig] = None, runner: Optional[Runner] = None) -> None:
        self.config = config or AppConfig()
        self._runner = runner or run_ffmpeg

    def run(self, job: JobConfig) -> ConcatResult:
        binary = resolve_ffmpeg(self.config.ffmpeg_binary)

        with TempStreamSet(directory=self.config.temp_dir) as streams:
            for index, spec in enumerate(job.inputs, start=1):
                handle = streams.allocate()
                logger.debug("Segment %d/%d: %s -> %s", index, len(job.inputs), spec.path, handle.path)
                self._invoke(build_segment_args(spec, handle.path), binary)

            self._concat(streams.paths, job.output_path, binary, job.output_path.exists())

        return ConcatResult(output_path=job.output_path, segment_count=len(job.inputs))

    # ------------------------------------------------------------------
    def _concat(self, segments: Sequence[Path], output: Path, binary: str, preexisting: bool) -> None:
        try:
            self._invoke(build_concat_args(segments, output), binary)
        except ExternalToolError:
            if preexisting:
                logger.warning("Output %s appeared during the run; leaving it untouched", output)
                raise
            # Absent right before the concat, so anything there now is ffmpeg's partial write.
            try:
                output.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove partial output %s: %s", output, exc)
            raise

    def _invoke(self, args: List[str], binary: str) -> None:
        self._runner(args, binary=binary, loglevel=self.config.ffmpeg_loglevel)
