"""Tests for mkvsubs.formats module."""

from __future__ import annotations

import pytest

from mkvsubs.formats import (
    SUBTITLE_FORMATS,
    ResolvedFormat,
    Unsupported,
    resolve_format,
    supported_codecs,
)


class TestResolveFormat:
    @pytest.mark.parametrize(
        ("codec_id", "extension", "is_text"),
        [
            ("subrip", "srt", True),
            ("ass", "ass", True),
            ("ssa", "ssa", True),
            ("webvtt", "vtt", True),
            ("hdmv_pgs_subtitle", "sup", False),
            ("dvd_subtitle", "sub", False),
        ],
    )
    def test_known_codecs(self, codec_id: str, extension: str, is_text: bool) -> None:
        fmt = resolve_format(codec_id)
        assert isinstance(fmt, ResolvedFormat)
        assert fmt.extension == extension
        assert fmt.is_text is is_text

    def test_text_formats_use_ffmpeg_muxer(self) -> None:
        fmt = resolve_format("subrip")
        assert fmt.tool == "ffmpeg"
        assert fmt.muxer == "srt"
        assert fmt.companion_extension is None

    def test_ssa_is_written_by_ass_muxer(self) -> None:
        assert resolve_format("ssa").muxer == "ass"

    def test_pgs_has_no_companion(self) -> None:
        fmt = resolve_format("hdmv_pgs_subtitle")
        assert fmt.companion_extension is None
        assert fmt.muxer == "sup"

    def test_vobsub_has_idx_companion(self) -> None:
        fmt = resolve_format("dvd_subtitle")
        assert fmt.companion_extension == "idx"
        assert fmt.tool == "mkvextract"
        assert fmt.is_text is False

    def test_lookup_is_case_insensitive(self) -> None:
        assert resolve_format("SubRip") == resolve_format("subrip")

    @pytest.mark.parametrize("codec_id", ["dvb_subtitle", "mov_text", "eia_608", "unknown", ""])
    def test_unknown_codecs_are_unsupported(self, codec_id: str) -> None:
        result = resolve_format(codec_id)
        assert isinstance(result, Unsupported)
        assert result.codec_id == codec_id

    def test_every_table_entry_resolves_to_itself(self) -> None:
        for codec_id, fmt in SUBTITLE_FORMATS.items():
            assert resolve_format(codec_id) is fmt
            assert resolve_format(codec_id) == resolve_format(codec_id)

    def test_image_formats_are_not_text(self) -> None:
        for fmt in SUBTITLE_FORMATS.values():
            if fmt.tool == "mkvextract":
                assert not fmt.is_text
                assert fmt.companion_extension


class TestSupportedCodecs:
    def test_lists_table_keys(self) -> None:
        codecs = supported_codecs()
        assert "subrip" in codecs
        assert "dvd_subtitle" in codecs
        assert codecs == sorted(codecs)
