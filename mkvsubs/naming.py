"""
mkvsubs.naming - Output filename generation.

Names follow `{base}.{stream_index}.{language}.{extension}`, e.g.
`Blade Runner 2049.2.eng.srt`. Existing files are reported, never renamed
around: the caller decides whether to overwrite or skip.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from mkvsubs.formats import ResolvedFormat
from mkvsubs.tracks import SubtitleTrack

FALLBACK_LANGUAGE = "und"

INVALID_PATH_CHARS = set('/\\:*"<>|')


def sanitize_path_segment(segment: str) -> str:
    """Replace characters that are invalid in Windows paths with underscores."""
    return "".join("_" if c in INVALID_PATH_CHARS else c for c in segment)


def build_output_name(
    base: str,
    stream_index: int,
    language: str | None,
    extension: str,
    fallback_language: str = FALLBACK_LANGUAGE,
) -> str:
    """Build the output file name for one track.

    Args:
        base: Source file name without extension
        stream_index: Absolute stream index of the track
        language: Track language tag, if any
        extension: Output extension without the dot
        fallback_language: Used when the track has no language

    Returns:
        File name such as "movie.2.eng.srt"
    """
    lang = sanitize_path_segment(language) if language else fallback_language
    return f"{base}.{stream_index}.{lang}.{extension}"


def output_path_for(
    source: Path,
    track: SubtitleTrack,
    fmt: ResolvedFormat,
    output_dir: Path | None = None,
    fallback_language: str = FALLBACK_LANGUAGE,
) -> Path:
    """Candidate output path for a track, beside the source by default."""
    name = build_output_name(
        source.stem,
        track.stream_index,
        track.language,
        fmt.extension,
        fallback_language=fallback_language,
    )
    directory = output_dir if output_dir is not None else source.parent
    return directory / name


def companion_path_for(output_path: Path, fmt: ResolvedFormat) -> Path | None:
    """Path of the companion file (e.g. the .idx next to a VobSub .sub)."""
    if not fmt.companion_extension:
        return None
    return output_path.with_suffix(f".{fmt.companion_extension}")


def find_collisions(paths: Iterable[Path | None]) -> list[Path]:
    """Return the paths that already exist on disk."""
    return [p for p in paths if p is not None and p.exists()]
