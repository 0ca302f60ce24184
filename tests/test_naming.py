"""Tests for mkvsubs.naming module."""

from __future__ import annotations

from pathlib import Path

from mkvsubs.formats import resolve_format
from mkvsubs.naming import (
    build_output_name,
    companion_path_for,
    find_collisions,
    output_path_for,
    sanitize_path_segment,
)
from mkvsubs.tracks import SubtitleTrack


class TestBuildOutputName:
    def test_basic_pattern(self) -> None:
        assert build_output_name("movie", 2, "eng", "srt") == "movie.2.eng.srt"

    def test_missing_language_uses_und(self) -> None:
        assert build_output_name("movie", 4, None, "ass") == "movie.4.und.ass"

    def test_custom_fallback_language(self) -> None:
        assert build_output_name("movie", 4, None, "ass", fallback_language="xx") == "movie.4.xx.ass"

    def test_base_with_spaces_and_dots(self) -> None:
        name = build_output_name("Blade Runner 2049", 2, "eng", "srt")
        assert name == "Blade Runner 2049.2.eng.srt"

    def test_is_deterministic(self) -> None:
        assert build_output_name("a", 1, "eng", "srt") == build_output_name("a", 1, "eng", "srt")

    def test_different_indices_give_different_names(self) -> None:
        names = {build_output_name("movie", i, "eng", "srt") for i in range(10)}
        assert len(names) == 10

    def test_language_is_sanitized(self) -> None:
        assert build_output_name("movie", 2, "en/US", "srt") == "movie.2.en_US.srt"


class TestSanitizePathSegment:
    def test_replaces_invalid_characters(self) -> None:
        assert sanitize_path_segment('a/b\\c:d*e"f<g>h|i') == "a_b_c_d_e_f_g_h_i"

    def test_keeps_valid_characters(self) -> None:
        assert sanitize_path_segment("English (SDH)") == "English (SDH)"


class TestOutputPathFor:
    def test_beside_source(self, tmp_path: Path) -> None:
        track = SubtitleTrack(stream_index=2, codec_id="subrip", language="eng", title="Full")
        path = output_path_for(tmp_path / "movie.mkv", track, resolve_format("subrip"))
        assert path == tmp_path / "movie.2.eng.srt"

    def test_title_not_used(self, tmp_path: Path) -> None:
        track = SubtitleTrack(stream_index=2, codec_id="ass", language="jpn", title="Signs/Songs")
        path = output_path_for(tmp_path / "show.mkv", track, resolve_format("ass"))
        assert path.name == "show.2.jpn.ass"

    def test_output_dir(self, tmp_path: Path) -> None:
        track = SubtitleTrack(stream_index=3, codec_id="subrip")
        out = tmp_path / "subs"
        path = output_path_for(tmp_path / "movie.mkv", track, resolve_format("subrip"), out)
        assert path == out / "movie.3.und.srt"


class TestCompanionPathFor:
    def test_vobsub_companion(self, tmp_path: Path) -> None:
        fmt = resolve_format("dvd_subtitle")
        assert companion_path_for(tmp_path / "movie.5.eng.sub", fmt) == tmp_path / "movie.5.eng.idx"

    def test_text_format_has_none(self, tmp_path: Path) -> None:
        assert companion_path_for(tmp_path / "movie.2.eng.srt", resolve_format("subrip")) is None


class TestFindCollisions:
    def test_reports_existing_paths(self, tmp_path: Path) -> None:
        existing = tmp_path / "movie.2.eng.srt"
        existing.write_text("x")
        missing = tmp_path / "movie.3.eng.srt"
        assert find_collisions([existing, missing, None]) == [existing]

    def test_no_collisions(self, tmp_path: Path) -> None:
        assert find_collisions([tmp_path / "a.srt"]) == []
