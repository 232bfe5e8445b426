# -*- coding: utf-8 -*-
"""Encode a Composition to a QuickTime file with ffmpeg."""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import Future
from pathlib import Path

from socialstudio.core.task_runner import TaskRunner
from socialstudio.errors import ExportCancelledError, ExportError, MissingTrackError
from socialstudio.models.composition import Composition, TrackKind
from socialstudio.pipeline.media_probe import find_tool
from socialstudio.utils.file_utils import ensure_dir, remove_if_exists

logger = logging.getLogger(__name__)

VIDEO_CODEC = ["-c:v", "libx264", "-preset", "medium", "-crf", "18", "-pix_fmt", "yuv420p"]
AUDIO_CODEC = ["-c:a", "aac", "-b:a", "192k"]


def _ts(seconds: float) -> str:
    return f"{max(0.0, seconds):.3f}"


class CompositionExporter:
    """Single-attempt export of a composition; no retry, no cancellation handle."""

    def __init__(self, runner: TaskRunner | None = None, ffmpeg_path: str | None = None) -> None:
        self.runner = runner or TaskRunner(max_workers=2, thread_name_prefix="socialstudio-export")
        self.ffmpeg_path = ffmpeg_path

    def build_command(self, composition: Composition, output_path: Path, *, faststart: bool = False) -> list[str]:
        video_tracks = composition.video_tracks
        if not video_tracks:
            raise MissingTrackError("composition has no video track")
        for track in composition.tracks:
            if track.duration <= 0:
                raise ExportError(
                    f"{track.kind.value} track from {track.source.name} has no duration ({track.duration:.3f}s)"
                )

        cmd = [self.ffmpeg_path or find_tool("ffmpeg"), "-y", "-hide_banner", "-loglevel", "error"]
        for track in composition.tracks:
            cmd.extend(["-ss", _ts(track.source_start), "-t", _ts(track.duration)])
            if track.insert_at > 0:
                cmd.extend(["-itsoffset", _ts(track.insert_at)])
            cmd.extend(["-i", str(track.source)])

        video_index, video_track = next(
            (index, track) for index, track in enumerate(composition.tracks) if track.kind is TrackKind.VIDEO
        )
        cmd.extend(["-map", f"{video_index}:v:{video_track.stream_index}"])

        audio_inputs = [
            f"{index}:a:{track.stream_index}"
            for index, track in enumerate(composition.tracks)
            if track.kind is TrackKind.AUDIO
        ]
        if len(audio_inputs) == 1:
            cmd.extend(["-map", audio_inputs[0]])
        elif len(audio_inputs) > 1:
            labels = "".join(f"[{label}]" for label in audio_inputs)
            mix = f"{labels}amix=inputs={len(audio_inputs)}:duration=longest:normalize=0[aout]"
            cmd.extend(["-filter_complex", mix, "-map", "[aout]"])

        cmd.extend(VIDEO_CODEC)
        if audio_inputs:
            cmd.extend(AUDIO_CODEC)
        else:
            cmd.append("-an")
        cmd.extend(["-t", _ts(composition.duration)])
        if faststart:
            cmd.extend(["-movflags", "+faststart"])
        cmd.extend(["-f", "mov", str(output_path)])
        return cmd

    def run(self, composition: Composition, output_path: str | Path, *, faststart: bool = False) -> Path:
        """Export synchronously. Any file already at ``output_path`` is replaced."""
        target = Path(output_path)
        cmd = self.build_command(composition, target, faststart=faststart)
        ensure_dir(target.parent)
        if remove_if_exists(target):
            logger.debug("Removed previous export at %s", target)

        logger.info("Exporting %.3fs composition to %s", composition.duration, target)
        completed = subprocess.run(cmd, capture_output=True, text=True)
        if completed.returncode < 0:
            raise ExportCancelledError(f"ffmpeg terminated by signal {-completed.returncode}")
        if completed.returncode != 0:
            detail = (completed.stderr or "").strip().splitlines()
            raise ExportError(detail[-1] if detail else f"ffmpeg exited with {completed.returncode}")
        if not target.exists():
            raise ExportError(f"ffmpeg reported success but wrote no file at {target}")
        logger.info("Export finished: %s", target)
        return target

    def export(self, composition: Composition, output_path: str | Path, *, faststart: bool = False) -> Future:
        """Export on the runner; the future resolves to the output path or the export error."""
        return self.runner.submit(f"export:{Path(output_path).name}", self.run, composition, output_path, faststart=faststart)
