"""
mkvsubs.tracks - Subtitle track model and probe output parsing.

Turns ffprobe's JSON stream listing into an ordered list of typed
SubtitleTrack records. A malformed record fails the whole parse.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mkvsubs.exceptions import ParseError

UNKNOWN_CODEC = "unknown"


class SubtitleTrack(BaseModel):
    """One subtitle stream inside a container."""

    model_config = ConfigDict(frozen=True)

    stream_index: int = Field(ge=0)
    codec_id: str
    language: str | None = None
    title: str | None = None
    default: bool = False
    forced: bool = False

    @property
    def label(self) -> str:
        """Display label, e.g. `Stream #0:2 (eng) "subrip" "English SDH"`."""
        lang_part = f"({self.language}) " if self.language else ""
        title_part = f' "{self.title}"' if self.title else ""
        return f'Stream #0:{self.stream_index} {lang_part}"{self.codec_id}"{title_part}'


def _tag(tags: dict[str, Any], name: str) -> str | None:
    """Case-insensitive tag lookup; empty values count as absent."""
    for key, value in tags.items():
        if key.lower() == name and isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _parse_index(stream: dict[str, Any], position: int) -> int:
    if "index" not in stream:
        raise ParseError(f"stream record {position} has no index")
    index = stream["index"]
    if isinstance(index, bool) or not isinstance(index, int):
        raise ParseError(f"stream record {position} has non-integer index {index!r}")
    if index < 0:
        raise ParseError(f"stream record {position} has negative index {index}")
    return index


def parse_subtitle_tracks(raw: str) -> list[SubtitleTrack]:
    """Parse ffprobe JSON output into subtitle tracks.

    Args:
        raw: Output of `ffprobe -print_format json -show_streams`

    Returns:
        Subtitle tracks in container stream order (empty if there are none)

    Raises:
        ParseError: If the document or any subtitle record is malformed
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, dict):
        raise ParseError("top-level value is not an object")

    streams = data.get("streams")
    if not isinstance(streams, list):
        raise ParseError("missing 'streams' list")

    tracks = []
    seen: set[int] = set()
    for position, stream in enumerate(streams):
        if not isinstance(stream, dict):
            raise ParseError(f"stream record {position} is not an object")
        if stream.get("codec_type") != "subtitle":
            continue

        index = _parse_index(stream, position)
        if index in seen:
            raise ParseError(f"duplicate stream index {index}")
        seen.add(index)

        tags = stream.get("tags") or {}
        disposition = stream.get("disposition") or {}
        tracks.append(
            SubtitleTrack(
                stream_index=index,
                codec_id=stream.get("codec_name") or UNKNOWN_CODEC,
                language=_tag(tags, "language"),
                title=_tag(tags, "title"),
                default=disposition.get("default", 0) == 1,
                forced=disposition.get("forced", 0) == 1,
            )
        )

    return tracks
