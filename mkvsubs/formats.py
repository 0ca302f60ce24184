"""
mkvsubs.formats - Subtitle codec to output format mapping.

An explicit table from ffprobe codec names to output formats. Codecs missing
from the table are reported as Unsupported rather than guessed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ResolvedFormat(BaseModel):
    """How a subtitle codec is written to disk."""

    model_config = ConfigDict(frozen=True)

    codec_id: str
    extension: str
    is_text: bool
    muxer: str | None = None
    companion_extension: str | None = None
    tool: Literal["ffmpeg", "mkvextract"] = "ffmpeg"


class Unsupported(BaseModel):
    """No output format is known for this codec."""

    model_config = ConfigDict(frozen=True)

    codec_id: str


def _text(codec_id: str, extension: str, muxer: str) -> ResolvedFormat:
    return ResolvedFormat(codec_id=codec_id, extension=extension, is_text=True, muxer=muxer)


SUBTITLE_FORMATS: dict[str, ResolvedFormat] = {
    "subrip": _text("subrip", "srt", "srt"),
    "srt": _text("srt", "srt", "srt"),
    "ass": _text("ass", "ass", "ass"),
    "ssa": _text("ssa", "ssa", "ass"),
    "webvtt": _text("webvtt", "vtt", "webvtt"),
    # Blu-ray PGS bitmaps
    "hdmv_pgs_subtitle": ResolvedFormat(
        codec_id="hdmv_pgs_subtitle", extension="sup", is_text=False, muxer="sup"
    ),
    "pgssub": ResolvedFormat(codec_id="pgssub", extension="sup", is_text=False, muxer="sup"),
    # DVD VobSub: .sub payload plus .idx index, written by mkvextract
    "dvd_subtitle": ResolvedFormat(
        codec_id="dvd_subtitle",
        extension="sub",
        is_text=False,
        companion_extension="idx",
        tool="mkvextract",
    ),
    "dvdsub": ResolvedFormat(
        codec_id="dvdsub",
        extension="sub",
        is_text=False,
        companion_extension="idx",
        tool="mkvextract",
    ),
    "vobsub": ResolvedFormat(
        codec_id="vobsub",
        extension="sub",
        is_text=False,
        companion_extension="idx",
        tool="mkvextract",
    ),
}


def resolve_format(codec_id: str) -> ResolvedFormat | Unsupported:
    """Map a codec identifier to its output format.

    Args:
        codec_id: Codec name as reported by ffprobe

    Returns:
        The ResolvedFormat, or Unsupported if the codec is not in the table
    """
    fmt = SUBTITLE_FORMATS.get(codec_id.lower())
    if fmt is None:
        return Unsupported(codec_id=codec_id)
    return fmt


def supported_codecs() -> list[str]:
    """Codec identifiers with a known output format."""
    return sorted(SUBTITLE_FORMATS)
