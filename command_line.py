"""Command-line parsing for catmp4.

Trim flags attach to the input file that precedes them, so the arguments are
scanned in order by a small lexer instead of argparse.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from errors import (
    InputNotFoundError,
    InvalidOutputDirectoryError,
    MissingValueError,
    NoInputsError,
    NoOutputError,
    OrderingError,
    OutputExistsError,
    UnknownArgumentError,
)
from job_model import InputSpec, JobConfig
from logging_utils import get_logger

logger = get_logger(__name__)


SYNTAX = """Syntax
  catmp4 <inputFilename [-ss <startTime>] [-t <duration>] [-to <endTime>]> ... -out <fileName>

Concatenates multiple .mp4 files or snippets thereof into one video using ffmpeg.

  -out <fileName>   Output file. Must not exist yet; its directory must exist.
  -ss <startTime>   Start offset for the preceding input file.
  -t <duration>     Duration to take from the preceding input file.
  -to <endTime>     End offset for the preceding input file.
  -h, -?            Show this help.

Time values are passed to ffmpeg as-is (e.g. 90, 00:01:30, 00:01:30.500).
"""

HELP_FLAGS = frozenset({"-h", "-?", "-help", "--help"})

# flag -> InputSpec field
TRIM_FLAGS: Dict[str, str] = {
    "-ss": "start_time",
    "-t": "duration",
    "-to": "end_time",
}

OUTPUT_FLAG = "-out"


def wants_help(args: Sequence[str]) -> bool:
    """True for an empty argument list or a help flag anywhere in it."""
    return not args or any(token.lower() in HELP_FLAGS for token in args)


def is_flag(token: str) -> bool:
    return len(token) > 1 and token.startswith("-")


@dataclass(frozen=True)
class ParsedCommandLine:
    show_help: bool = False
    job: Optional[JobConfig] = None


class CommandLineLexer:
    """Forward-only cursor over the raw argument list."""

    def __init__(self, args: Sequence[str]) -> None:
        self._args: List[str] = list(args)
        self._index = -1

    @property
    def current(self) -> str:
        return self._args[self._index]

    @property
    def is_flag(self) -> bool:
        return is_flag(self.current)

    def move_next(self) -> bool:
        if self._index + 1 >= len(self._args):
            return False
        self._index += 1
        return True

    def read_next_value(self) -> str:
        flag = self.current
        if self._index + 1 >= len(self._args) or is_flag(self._args[self._index + 1]):
            raise MissingValueError(flag)
        self._index += 1
        return self.current


def parse_command_line(args: Sequence[str]) -> ParsedCommandLine:
    """Turn raw arguments into a validated JobConfig.

    A help flag anywhere wins over everything else. Otherwise errors are
    raised in scan order, and output checks only run once every token has
    been consumed.
    """
    if args and wants_help(args):
        return ParsedCommandLine(show_help=True)

    lexer = CommandLineLexer(args)
    inputs: List[InputSpec] = []
    output: Optional[str] = None

    while lexer.move_next():
        if not lexer.is_flag:
            path = Path(lexer.current).expanduser().resolve()
            if not path.is_file():
                raise InputNotFoundError(lexer.current)
            inputs.append(InputSpec(path=path))
            continue

        flag = lexer.current.lower()
        if flag == OUTPUT_FLAG:
            output = lexer.read_next_value()
        elif flag in TRIM_FLAGS:
            if not inputs:
                raise OrderingError(lexer.current)
            value = lexer.read_next_value()
            inputs[-1] = replace(inputs[-1], **{TRIM_FLAGS[flag]: value})
        else:
            raise UnknownArgumentError(lexer.current)

    if not inputs:
        raise NoInputsError()
    if not output:
        raise NoOutputError()

    output_path = Path(output).expanduser().resolve()
    if not output_path.parent.is_dir():
        raise InvalidOutputDirectoryError(str(output_path))
    if output_path.exists():
        raise OutputExistsError(str(output_path))

    logger.debug("Parsed %d input(s) -> %s", len(inputs), output_path)
    return ParsedCommandLine(job=JobConfig(inputs=tuple(inputs), output_path=output_path))
