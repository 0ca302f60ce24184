"""
mkvsubs.extract - Subtitle extraction orchestration.

For each selected track: resolve its output format, check for an existing
output file, then stream-copy the track with ffmpeg (or mkvextract for
VobSub) and verify the result. Tracks are processed one at a time and
independently; a failed track never stops the remaining ones.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mkvsubs.config import ToolConfig
from mkvsubs.exceptions import ExtractionError
from mkvsubs.formats import ResolvedFormat, Unsupported, resolve_format
from mkvsubs.naming import companion_path_for, find_collisions, output_path_for
from mkvsubs.probe import Runner
from mkvsubs.selection import SelectionGateway
from mkvsubs.tracks import SubtitleTrack
from mkvsubs.utils import tail

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["succeeded", "failed", "skipped", "unsupported"]


class ExtractionRequest(BaseModel):
    """One confirmed unit of work."""

    model_config = ConfigDict(frozen=True)

    source_file: Path
    track: SubtitleTrack
    format: ResolvedFormat
    output_path: Path
    companion_path: Path | None = None
    overwrite_decision: Literal["overwrite", "skip"] | None = None


class ExtractionOutcome(BaseModel):
    """Result of one extraction attempt."""

    model_config = ConfigDict(frozen=True)

    track: SubtitleTrack
    status: OutcomeStatus
    output_path: Path | None = None
    companion_path: Path | None = None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class RunSummary(BaseModel):
    """Per-track outcomes of a run, in selection order."""

    source_file: Path
    outcomes: list[ExtractionOutcome] = Field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def exit_code(self) -> int:
        """1 if any track failed; skipped and unsupported tracks don't count."""
        return 1 if any(o.failed for o in self.outcomes) else 0


def partial_path(path: Path) -> Path:
    """Hidden sibling the tool writes to before the result is moved into place."""
    return path.with_name(f".{path.stem}.partial{path.suffix}")


class SubtitleExtractor:
    """Drives extraction of selected subtitle tracks from one container."""

    def __init__(
        self,
        config: ToolConfig,
        gateway: SelectionGateway,
        runner: Runner | None = None,
    ) -> None:
        self.config = config
        self.gateway = gateway
        self.runner = runner

    def prepare(
        self, source: Path, track: SubtitleTrack
    ) -> ExtractionRequest | ExtractionOutcome:
        """Resolve format and output paths, and settle any collision.

        Returns:
            An ExtractionRequest ready to run, or a terminal outcome
            ("unsupported" or "skipped") when nothing should be invoked
        """
        fmt = resolve_format(track.codec_id)
        if isinstance(fmt, Unsupported):
            logger.warning(
                "Skipping stream %d: unsupported subtitle codec %r",
                track.stream_index,
                fmt.codec_id,
            )
            return ExtractionOutcome(
                track=track,
                status="unsupported",
                reason=f"Unsupported subtitle codec: {fmt.codec_id}",
            )

        output_path = output_path_for(
            source,
            track,
            fmt,
            output_dir=self.config.output_dir,
            fallback_language=self.config.fallback_language,
        )
        companion_path = companion_path_for(output_path, fmt)

        decision = None
        existing = find_collisions([output_path, companion_path])
        if existing:
            decision = self._decide_overwrite(existing[0])
            if decision == "skip":
                logger.info("Skipping stream %d: %s exists", track.stream_index, existing[0])
                return ExtractionOutcome(
                    track=track,
                    status="skipped",
                    output_path=output_path,
                    companion_path=companion_path,
                    reason=f"Output file already exists: {existing[0]}",
                )

        return ExtractionRequest(
            source_file=source,
            track=track,
            format=fmt,
            output_path=output_path,
            companion_path=companion_path,
            overwrite_decision=decision,
        )

    def _decide_overwrite(self, path: Path) -> Literal["overwrite", "skip"]:
        policy = self.config.on_existing
        if policy == "ask":
            return "overwrite" if self.gateway.confirm_overwrite(path) else "skip"
        return policy

    def build_command(self, request: ExtractionRequest, output: Path) -> list[str]:
        """Build the stream-copy command writing the track to `output`."""
        index = request.track.stream_index
        if request.format.tool == "mkvextract":
            # writes the .idx companion next to the .sub
            return [
                self.config.mkvextract,
                str(request.source_file.absolute()),
                "tracks",
                f"{index}:{output.absolute()}",
            ]

        cmd = [
            self.config.ffmpeg,
            "-nostdin",
            "-y",
            "-v",
            "error",
            "-i",
            str(request.source_file.absolute()),
            "-map",
            f"0:{index}",
            "-c",
            "copy",
        ]
        if request.format.muxer:
            cmd += ["-f", request.format.muxer]
        cmd.append(str(output.absolute()))
        return cmd

    def _run(self, request: ExtractionRequest, temp_output: Path, temp_companion: Path | None):
        runner = self.runner or subprocess.run
        cmd = self.build_command(request, temp_output)
        tool = cmd[0]
        logger.debug("Running %s", " ".join(cmd))

        try:
            proc = runner(
                cmd, capture_output=True, text=True, encoding="utf-8", errors="replace"
            )
        except FileNotFoundError as e:
            raise ExtractionError(f"{tool} not found") from e
        except OSError as e:
            raise ExtractionError(f"Could not run {tool}: {e}") from e

        if proc.returncode != 0:
            detail = tail(proc.stderr) or tail(proc.stdout)
            message = f"{tool} exited with status {proc.returncode}"
            raise ExtractionError(f"{message}: {detail}" if detail else message)

        for produced in (temp_output, temp_companion):
            if produced is None:
                continue
            if not produced.exists():
                raise ExtractionError(f"{tool} produced no output file ({produced.name})")
            if produced.stat().st_size == 0:
                raise ExtractionError(f"{tool} produced an empty file ({produced.name})")

    def extract(self, request: ExtractionRequest) -> ExtractionOutcome:
        """Run the extraction for one request and verify the output.

        The tool writes to hidden partial files which replace the final paths
        only after verification, so a failed run leaves an existing file intact.
        """
        temp_output = partial_path(request.output_path)
        temp_companion = companion_path_for(temp_output, request.format)
        temps = [p for p in (temp_output, temp_companion) if p is not None]

        logger.info("Extracting subtitle track: %s", request.track.label)
        try:
            request.output_path.parent.mkdir(parents=True, exist_ok=True)
            for p in temps:
                p.unlink(missing_ok=True)

            self._run(request, temp_output, temp_companion)

            # the .sub lands last so a failed .idx move never leaves a new .sub behind
            if temp_companion is not None and request.companion_path is not None:
                temp_companion.replace(request.companion_path)
            temp_output.replace(request.output_path)
        except ExtractionError as e:
            return self._failed(request, str(e), temps)
        except OSError as e:
            return self._failed(request, f"Could not write output: {e}", temps)

        return ExtractionOutcome(
            track=request.track,
            status="succeeded",
            output_path=request.output_path,
            companion_path=request.companion_path,
        )

    def _failed(
        self, request: ExtractionRequest, reason: str, temps: list[Path]
    ) -> ExtractionOutcome:
        for p in temps:
            p.unlink(missing_ok=True)
        logger.warning("Failed to extract stream %d: %s", request.track.stream_index, reason)
        return ExtractionOutcome(
            track=request.track,
            status="failed",
            output_path=request.output_path,
            companion_path=request.companion_path,
            reason=reason,
        )

    def process(self, source: Path, track: SubtitleTrack) -> ExtractionOutcome:
        """Prepare and, unless skipped or unsupported, extract one track."""
        prepared = self.prepare(source, track)
        if isinstance(prepared, ExtractionOutcome):
            return prepared
        return self.extract(prepared)

    def extract_tracks(self, source: Path, tracks: Sequence[SubtitleTrack]) -> RunSummary:
        """Extract tracks sequentially; outcomes keep the given order."""
        summary = RunSummary(source_file=source)
        for track in tracks:
            summary.outcomes.append(self.process(source, track))
        return summary
