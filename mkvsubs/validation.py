"""
mkvsubs.validation - Dependency checks and input validation.

Validates the environment and the source file before probing.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from mkvsubs.config import ToolConfig
from mkvsubs.exceptions import DependencyError, ValidationError

MATROSKA_SUFFIXES = {".mkv"}

FFMPEG_HINT = "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"
MKVTOOLNIX_HINT = "Install with: brew install mkvtoolnix (macOS) or apt install mkvtoolnix (Linux)"


def _tool_version(executable: str) -> str:
    """Return the version token from `<tool> --version`/`-version` output."""
    flag = "--version" if Path(executable).stem == "mkvextract" else "-version"
    try:
        proc = subprocess.run(
            [executable, flag],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        tokens = version_line.split()
        # "ffmpeg version 6.1 ..." / "mkvextract v80.0 ('...')"
        if len(tokens) >= 3 and tokens[1] == "version":
            return tokens[2]
        return tokens[1] if len(tokens) >= 2 else "unknown"
    except (subprocess.TimeoutExpired, OSError):
        return "unknown"


def check_tool(name: str, executable: str, install_hint: str) -> dict[str, str]:
    """Check that one external tool is on PATH.

    Args:
        name: Human-readable tool name
        executable: Executable name or path from the config
        install_hint: Shown when the tool is missing

    Returns:
        Dict with 'path' and 'version'

    Raises:
        DependencyError: If the executable cannot be found
    """
    path = shutil.which(executable)
    if not path:
        raise DependencyError(name, f"{executable} not found in PATH", install_hint)
    return {"path": path, "version": _tool_version(path)}


def check_tools(config: ToolConfig, require_mkvextract: bool = False) -> dict[str, dict[str, str]]:
    """Check the tools needed for a run.

    Args:
        config: Tool configuration
        require_mkvextract: Also require mkvextract (VobSub tracks selected)

    Returns:
        Dict keyed by tool name with 'path' and 'version'

    Raises:
        DependencyError: If a required tool is missing
    """
    result = {
        "ffprobe": check_tool("ffprobe", config.ffprobe, FFMPEG_HINT),
        "ffmpeg": check_tool("ffmpeg", config.ffmpeg, FFMPEG_HINT),
    }
    if require_mkvextract:
        result["mkvextract"] = check_tool("mkvextract", config.mkvextract, MKVTOOLNIX_HINT)
    return result


def validate_source_file(path: Path) -> Path:
    """Validate that a source file exists and is a Matroska file.

    Args:
        path: Path to the source file

    Returns:
        The validated path

    Raises:
        ValidationError: If the file doesn't exist, isn't a file, or isn't MKV
    """
    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Not a file: {path}")

    if path.suffix.lower() not in MATROSKA_SUFFIXES:
        raise ValidationError(f"Not an MKV file: {path}")

    return path
