# -*- coding: utf-8 -*-
"""Lay an external audio track over a video and export the result."""

from __future__ import annotations

import logging
import tempfile
from concurrent.futures import Future
from pathlib import Path
from typing import Any

from socialstudio.constants import MERGE_OUTPUT_NAME
from socialstudio.errors import MissingTrackError
from socialstudio.models.composition import Composition, CompositionTrack, MediaInfo, TrackKind
from socialstudio.pipeline.exporter import CompositionExporter
from socialstudio.pipeline.media_probe import MediaProbe

logger = logging.getLogger(__name__)


class AudioMerger:
    """Combine picture, original sound and a new audio track.

    Every track starts at zero and spans the video's duration: a shorter
    audio file leaves silence at the end, a longer one is cut.
    """

    def __init__(
        self,
        exporter: CompositionExporter | None = None,
        probe: MediaProbe | None = None,
        temp_dir: str | Path | None = None,
        output_name: str = MERGE_OUTPUT_NAME,
    ) -> None:
        self.exporter = exporter or CompositionExporter()
        self.probe = probe or MediaProbe()
        self.temp_dir = Path(temp_dir) if temp_dir else None
        self.output_name = output_name

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        exporter: CompositionExporter | None = None,
        probe: MediaProbe | None = None,
    ) -> AudioMerger:
        media = config.get("media", {})
        return cls(
            exporter=exporter,
            probe=probe,
            temp_dir=media.get("temp_dir") or None,
            output_name=media.get("merge_output_name") or MERGE_OUTPUT_NAME,
        )

    def default_output_path(self) -> Path:
        return (self.temp_dir or Path(tempfile.gettempdir())) / self.output_name

    def build_composition(self, video: MediaInfo, audio: MediaInfo) -> Composition:
        if not video.has_video:
            raise MissingTrackError(f"{video.path.name} has no video track")

        duration = video.duration
        composition = Composition()
        composition.add_track(CompositionTrack(TrackKind.VIDEO, video.path, 0.0, duration))
        if video.has_audio:
            composition.add_track(CompositionTrack(TrackKind.AUDIO, video.path, 0.0, duration))
        if audio.has_audio:
            composition.add_track(CompositionTrack(TrackKind.AUDIO, audio.path, 0.0, duration))
        else:
            logger.warning("%s has no audio stream; merging picture and original sound only", audio.path.name)
        return composition

    def _merge(self, video_path: Path, audio_path: Path, output_path: Path) -> Path:
        video = self.probe.probe(video_path)
        if not video.has_video:
            raise MissingTrackError(f"{video_path.name} has no video track")
        audio = self.probe.probe(audio_path)
        composition = self.build_composition(video, audio)
        return self.exporter.run(composition, output_path, faststart=True)

    def merge(self, video_path: str | Path, audio_path: str | Path, output_path: str | Path | None = None) -> Future:
        """Start the merge; the future yields the merged file path."""
        target = Path(output_path) if output_path else self.default_output_path()
        logger.info("Merging %s with %s -> %s", Path(video_path).name, Path(audio_path).name, target)
        return self.exporter.runner.submit(
            f"merge:{target.name}", self._merge, Path(video_path), Path(audio_path), target
        )
