from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any, List

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from concat_ffmpeg import runner  # noqa: E402
from concat_ffmpeg.runner import format_command, resolve_ffmpeg, run_ffmpeg  # noqa: E402
from errors import ExternalToolError, ToolNotFoundError  # noqa: E402
from logging_utils import configure_logging  # noqa: E402


class RecordingRun:
    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: List[List[str]] = []

    def __call__(self, cmd: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=None, stderr=self.stderr)


def test_run_ffmpeg_prefixes_binary_and_quiet_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = RecordingRun()
    monkeypatch.setattr(runner.subprocess, "run", fake)

    run_ffmpeg(["-i", "in.mp4", "out.ts"], binary="/opt/ffmpeg", loglevel="warning")

    assert fake.calls == [
        ["/opt/ffmpeg", "-hide_banner", "-loglevel", "warning", "-nostats", "-i", "in.mp4", "out.ts"]
    ]


def test_run_ffmpeg_logs_command_before_running(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(runner.subprocess, "run", RecordingRun())

    with caplog.at_level("INFO"):
        run_ffmpeg(["-i", "my clip.mp4"])

    assert "FFmpeg -hide_banner -loglevel error -nostats -i 'my clip.mp4'" in caplog.text


def test_command_echo_survives_warning_level(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(runner.subprocess, "run", RecordingRun())
    configure_logging("WARNING")

    run_ffmpeg(["-i", "in.mp4", "out.ts"])
    runner.logger.info("hidden")

    out = capsys.readouterr().out
    assert "FFmpeg -hide_banner -loglevel error -nostats -i in.mp4 out.ts" in out
    assert "hidden" not in out


def test_run_ffmpeg_raises_with_exit_code(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(runner.subprocess, "run", RecordingRun(returncode=183, stderr="bad\nworse\n"))

    with pytest.raises(ExternalToolError) as excinfo:
        run_ffmpeg(["-i", "x"])

    assert excinfo.value.exit_code == 183
    assert excinfo.value.stderr_tail == "bad\nworse"
    assert "183" in str(excinfo.value)
    assert "ffmpeg: worse" in caplog.text


def test_run_ffmpeg_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(cmd: List[str], **kwargs: Any) -> None:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(runner.subprocess, "run", missing)

    with pytest.raises(ToolNotFoundError):
        run_ffmpeg(["-version"], binary="no-such-ffmpeg")


def test_resolve_ffmpeg_accepts_executable_path() -> None:
    assert resolve_ffmpeg(sys.executable) == sys.executable


def test_resolve_ffmpeg_rejects_unknown_binary() -> None:
    with pytest.raises(ToolNotFoundError) as excinfo:
        resolve_ffmpeg("definitely-not-an-ffmpeg-binary")
    assert excinfo.value.binary == "definitely-not-an-ffmpeg-binary"


def test_format_command_quotes_arguments_with_spaces() -> None:
    assert format_command(["-i", "a b.mp4", "out.ts"]) == "-i 'a b.mp4' out.ts"
