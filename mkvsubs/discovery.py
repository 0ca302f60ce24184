"""
mkvsubs.discovery - Find candidate MKV files.
"""

from __future__ import annotations

from pathlib import Path

from mkvsubs.validation import MATROSKA_SUFFIXES


def gather_mkv_files(directory: Path) -> list[Path]:
    """Return MKV files directly inside a directory, sorted by name.

    Args:
        directory: Directory to scan (not recursive)

    Returns:
        Paths of regular files with an .mkv suffix (case-insensitive)
    """
    candidates = [
        entry
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix.lower() in MATROSKA_SUFFIXES
    ]
    return sorted(candidates, key=lambda p: p.name.lower())
