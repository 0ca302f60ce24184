"""
mkvsubs.utils - Shared utility functions.

Small formatting helpers for the summary table and tool error messages.
"""

from __future__ import annotations

from pathlib import Path


def format_size(path: Path) -> str:
    """Format file size in human-readable format."""
    if not path.exists():
        return "-"
    size = path.stat().st_size
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def tail(text: str, lines: int = 5) -> str:
    """Return the last few non-empty lines of tool output.

    Args:
        text: Captured stdout/stderr
        lines: Maximum number of lines to keep

    Returns:
        The trailing lines joined with newlines
    """
    kept = [line for line in (text or "").splitlines() if line.strip()]
    return "\n".join(kept[-lines:])
