"""Command line entry for catmp4."""
from __future__ import annotations

import sys
from typing import List, Optional

from command_line import SYNTAX, parse_command_line, wants_help
from concat_ffmpeg.pipeline import ConcatPipeline
from config_loader import AppConfig, load_config
from errors import CatMp4Error
from logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


def _report(exc: CatMp4Error, debug: bool) -> int:
    if debug:
        logger.error("%s", exc, exc_info=exc)
    else:
        logger.error("%s", exc)
    return exc.exit_status


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    configure_logging("INFO")
    # Help never depends on a readable configuration.
    if wants_help(args):
        print(SYNTAX)
        return 0

    config = AppConfig()
    try:
        config = load_config()
        configure_logging(config.logging_level, config.log_file)
        logger.debug("Configuration: %s", config.dumps())

        job = parse_command_line(args).job
        assert job is not None
        result = ConcatPipeline(config).run(job)
    except CatMp4Error as exc:
        return _report(exc, config.debug)

    logger.info("Wrote %s (%d clip(s))", result.output_path, result.segment_count)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
