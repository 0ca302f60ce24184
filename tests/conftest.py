"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import pytest

from mkvsubs.config import ToolConfig
from mkvsubs.selection import ScriptedSelectionGateway


def make_probe_output(streams: list[dict[str, Any]]) -> str:
    """Render stream records the way `ffprobe -print_format json` does."""
    return json.dumps({"streams": streams}, indent=4)


def subtitle_stream(
    index: int,
    codec: str | None,
    language: str | None = None,
    title: str | None = None,
    **disposition: int,
) -> dict[str, Any]:
    stream: dict[str, Any] = {"index": index, "codec_type": "subtitle"}
    if codec is not None:
        stream["codec_name"] = codec
    tags = {}
    if language is not None:
        tags["language"] = language
    if title is not None:
        tags["title"] = title
    if tags:
        stream["tags"] = tags
    stream["disposition"] = {"default": 0, "forced": 0, **disposition}
    return stream


VIDEO_STREAM = {"index": 0, "codec_name": "h264", "codec_type": "video"}
AUDIO_STREAM = {
    "index": 1,
    "codec_name": "aac",
    "codec_type": "audio",
    "tags": {"language": "jpn"},
}


class FakeRunner:
    """Stands in for subprocess.run, imitating ffprobe, ffmpeg and mkvextract.

    Extraction commands write a small file to their output path unless the
    stream index is listed in `fail` (non-zero exit) or `empty` (zero bytes).
    """

    def __init__(self, probe_output: str = "", probe_returncode: int = 0) -> None:
        self.probe_output = probe_output
        self.probe_returncode = probe_returncode
        self.fail: set[int] = set()
        self.empty: set[int] = set()
        self.calls: list[list[str]] = []
        self.call_kwargs: list[dict[str, Any]] = []

    @property
    def extraction_calls(self) -> list[list[str]]:
        return [c for c in self.calls if "ffprobe" not in Path(c[0]).name]

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        self.call_kwargs.append(kwargs)
        tool = Path(cmd[0]).name

        if "ffprobe" in tool:
            stderr = "" if self.probe_returncode == 0 else "Invalid data found when processing input"
            return subprocess.CompletedProcess(
                cmd, self.probe_returncode, stdout=self.probe_output, stderr=stderr
            )

        if "mkvextract" in tool:
            index_str, _, target = cmd[3].partition(":")
            index = int(index_str)
            outputs = [Path(target), Path(target).with_suffix(".idx")]
        else:
            index = int(cmd[cmd.index("-map") + 1].split(":")[1])
            outputs = [Path(cmd[-1])]

        if index in self.fail:
            return subprocess.CompletedProcess(
                cmd, 1, stdout="", stderr=f"Stream map '0:{index}' matches no streams."
            )
        for output in outputs:
            output.write_bytes(b"" if index in self.empty else b"1\n00:00:01,000 --> 00:00:02,000\nHi\n")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture
def show_probe_output() -> str:
    """Probe output for a file with video, audio and two subtitle streams."""
    return make_probe_output(
        [
            VIDEO_STREAM,
            AUDIO_STREAM,
            subtitle_stream(2, "ass", "jpn", "Signs & Songs", default=1),
            subtitle_stream(3, "subrip", "eng"),
        ]
    )


@pytest.fixture
def fake_runner(show_probe_output: str) -> FakeRunner:
    return FakeRunner(show_probe_output)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """An (empty) MKV file named show.mkv."""
    path = tmp_path / "show.mkv"
    path.write_bytes(b"\x1aE\xdf\xa3")
    return path


@pytest.fixture
def tool_config() -> ToolConfig:
    return ToolConfig(on_existing="ask")


@pytest.fixture
def gateway() -> ScriptedSelectionGateway:
    return ScriptedSelectionGateway(overwrite=False)
