"""Error taxonomy for catmp4.

Every error carries the process exit status the CLI driver should return.
Usage errors (bad arguments, bad configuration) exit with 2, failures of the
external tool exit with 1.
"""
from __future__ import annotations

from typing import Optional


class CatMp4Error(Exception):
    """Base class for all errors reported to the user."""

    exit_status: int = 1


class UsageError(CatMp4Error):
    """Problem with the command line; raised before any work starts."""

    exit_status = 2


class InputNotFoundError(UsageError, FileNotFoundError):
    def __init__(self, argument: str) -> None:
        super().__init__(f"Input file not found: '{argument}'.")
        self.argument = argument


class OrderingError(UsageError):
    def __init__(self, flag: str) -> None:
        super().__init__(f"{flag} must come after an input filename.")
        self.flag = flag


class UnknownArgumentError(UsageError):
    def __init__(self, flag: str) -> None:
        super().__init__(f"Unexpected command-line argument '{flag}'.")
        self.flag = flag


class MissingValueError(UsageError):
    def __init__(self, flag: str) -> None:
        super().__init__(f"Command-line argument '{flag}' expects a value.")
        self.flag = flag


class NoInputsError(UsageError):
    def __init__(self) -> None:
        super().__init__("No input files specified.")


class NoOutputError(UsageError):
    def __init__(self) -> None:
        super().__init__("No output filename specified.")


class InvalidOutputDirectoryError(UsageError):
    def __init__(self, output_path: str) -> None:
        super().__init__(f"Invalid output filename '{output_path}'. Directory does not exist.")
        self.output_path = output_path


class OutputExistsError(UsageError, FileExistsError):
    def __init__(self, output_path: str) -> None:
        super().__init__(f"Output filename '{output_path}' already exists.")
        self.output_path = output_path


class ConfigError(UsageError):
    pass


class ToolNotFoundError(CatMp4Error):
    def __init__(self, binary: str) -> None:
        super().__init__(
            f"ffmpeg executable '{binary}' not found. Install ffmpeg or set ffmpeg.binary in the config."
        )
        self.binary = binary


class ExternalToolError(CatMp4Error):
    def __init__(self, exit_code: int, stderr_tail: Optional[str] = None) -> None:
        super().__init__(f"ffmpeg exited with error code {exit_code}")
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail
