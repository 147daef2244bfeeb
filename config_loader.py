"""Configuration loader for catmp4."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml  # type: ignore
except ModuleNotFoundError as exc:  # pragma: no cover - import guard
    raise RuntimeError(
        "PyYAML is required. Please install it with `pip install pyyaml`."
    ) from exc

from errors import ConfigError

CONFIG_ENV_VAR = "CATMP4_CONFIG"
DEBUG_ENV_VAR = "CATMP4_DEBUG"
FFMPEG_ENV_VAR = "FFMPEG_BINARY"
DEFAULT_CONFIG_NAME = "catmp4.yaml"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AppConfig:
    """Wrapper around raw configuration with resolved values."""

    raw: Dict[str, Any] = field(default_factory=dict)
    config_path: Optional[Path] = None
    ffmpeg_binary: str = "ffmpeg"
    ffmpeg_loglevel: str = "error"
    temp_dir: Optional[Path] = None
    log_file: Optional[Path] = None
    debug: bool = False

    @property
    def logging_level(self) -> str:
        logging_cfg = self.raw.get("logging") or {}
        level = logging_cfg.get("level") or logging_cfg.get("LEVEL") or "INFO"
        return str(level).upper()

    def to_debug_dict(self) -> Dict[str, Any]:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "ffmpeg_binary": self.ffmpeg_binary,
            "ffmpeg_loglevel": self.ffmpeg_loglevel,
            "temp_dir": str(self.temp_dir) if self.temp_dir else None,
            "log_file": str(self.log_file) if self.log_file else None,
            "debug": self.debug,
        }

    def dumps(self) -> str:
        """Return a JSON string for diagnostics."""
        return json.dumps(self.to_debug_dict(), ensure_ascii=False, indent=2)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping.")
    return value


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def find_config_path(path: Path | str | None = None, cwd: Path | None = None) -> Optional[Path]:
    """Pick the config file to load; None means built-in defaults.

    An explicit path (argument or environment variable) must exist; the
    default file in the working directory is optional.
    """
    requested = path or os.environ.get(CONFIG_ENV_VAR)
    if requested:
        config_path = Path(requested).expanduser().resolve()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        return config_path

    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate.resolve() if candidate.is_file() else None


def load_config(path: Path | str | None = None, cwd: Path | None = None) -> AppConfig:
    """Load YAML config (if any) and apply environment overrides."""
    config_path = find_config_path(path, cwd)

    raw: Dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config root in {config_path} must be a mapping.")

    root = config_path.parent if config_path else (cwd or Path.cwd())

    ffmpeg_cfg = _section(raw, "ffmpeg")
    temp_cfg = _section(raw, "temp")
    logging_cfg = _section(raw, "logging")

    binary = os.environ.get(FFMPEG_ENV_VAR) or ffmpeg_cfg.get("binary") or "ffmpeg"
    loglevel = str(ffmpeg_cfg.get("loglevel") or "error")

    temp_dir = None
    if temp_cfg.get("directory"):
        temp_dir = (root / Path(str(temp_cfg["directory"])).expanduser()).resolve()

    log_file = None
    if logging_cfg.get("file"):
        log_file = (root / Path(str(logging_cfg["file"])).expanduser()).resolve()

    debug = _flag(raw.get("debug", False))
    if DEBUG_ENV_VAR in os.environ:
        debug = _flag(os.environ[DEBUG_ENV_VAR])

    return AppConfig(
        raw=raw,
        config_path=config_path,
        ffmpeg_binary=str(binary),
        ffmpeg_loglevel=loglevel,
        temp_dir=temp_dir,
        log_file=log_file,
        debug=debug,
    )
