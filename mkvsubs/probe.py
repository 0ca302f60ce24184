"""
mkvsubs.probe - ffprobe adapter.

Runs ffprobe on a container and hands back its raw JSON stream listing.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from mkvsubs.config import ToolConfig
from mkvsubs.exceptions import ProbeError
from mkvsubs.tracks import SubtitleTrack, parse_subtitle_tracks

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


def build_probe_command(path: Path, config: ToolConfig) -> list[str]:
    return [
        config.ffprobe,
        "-v",
        "error",
        "-print_format",
        "json",
        "-show_streams",
        # absolute, so a name starting with "-" is not read as an option
        str(path.absolute()),
    ]


def probe_streams(path: Path, config: ToolConfig, runner: Runner | None = None) -> str:
    """Probe a container for stream metadata.

    Args:
        path: Container file to inspect
        config: Tool configuration
        runner: subprocess.run-compatible callable (for tests)

    Returns:
        ffprobe's JSON output

    Raises:
        ProbeError: If ffprobe is missing, the file is unreadable, ffprobe
            exits non-zero, or it prints nothing
    """
    if runner is None:
        runner = subprocess.run

    if not path.is_file():
        raise ProbeError(path, "file does not exist or is not a regular file")

    cmd = build_probe_command(path, config)
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = runner(cmd, capture_output=True, text=True, encoding="utf-8", errors="replace")
    except FileNotFoundError as e:
        raise ProbeError(path, f"{config.ffprobe} not found") from e
    except OSError as e:
        raise ProbeError(path, f"could not run {config.ffprobe}: {e}") from e

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        raise ProbeError(path, stderr or f"{config.ffprobe} exited with status {proc.returncode}")

    if not (proc.stdout or "").strip():
        raise ProbeError(path, f"{config.ffprobe} produced no output")

    logger.debug("ffprobe output: %s", proc.stdout)
    return proc.stdout


def probe_subtitle_tracks(
    path: Path, config: ToolConfig, runner: Runner | None = None
) -> list[SubtitleTrack]:
    """Probe a container and return its subtitle tracks in stream order."""
    tracks = parse_subtitle_tracks(probe_streams(path, config, runner=runner))
    logger.info("Found %d subtitle tracks in %s", len(tracks), path)
    return tracks
