# -*- coding: utf-8 -*-
"""Trim a video to a time range and export it."""

from __future__ import annotations

import logging
import tempfile
from concurrent.futures import Future
from pathlib import Path
from typing import Any

from socialstudio.constants import TRIM_OUTPUT_NAME
from socialstudio.errors import ExportError
from socialstudio.models.composition import Composition, CompositionTrack, TrackKind, TrimRange
from socialstudio.pipeline.exporter import CompositionExporter
from socialstudio.pipeline.media_probe import MediaProbe

logger = logging.getLogger(__name__)


class VideoTrimmer:
    """Build a picture-only composition of one time range and export it.

    The range is checked against the probed source duration on the export
    thread; a range outside ``0 <= start < end <= duration`` fails the
    future with :class:`ExportError` and nothing is written.
    """

    def __init__(
        self,
        exporter: CompositionExporter | None = None,
        temp_dir: str | Path | None = None,
        output_name: str = TRIM_OUTPUT_NAME,
        probe: MediaProbe | None = None,
    ) -> None:
        self.exporter = exporter or CompositionExporter()
        self.temp_dir = Path(temp_dir) if temp_dir else None
        self.output_name = output_name
        self.probe = probe or MediaProbe()

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        exporter: CompositionExporter | None = None,
        probe: MediaProbe | None = None,
    ) -> VideoTrimmer:
        media = config.get("media", {})
        return cls(
            exporter=exporter,
            temp_dir=media.get("temp_dir") or None,
            output_name=media.get("trim_output_name") or TRIM_OUTPUT_NAME,
            probe=probe,
        )

    def default_output_path(self) -> Path:
        return (self.temp_dir or Path(tempfile.gettempdir())) / self.output_name

    def build_composition(self, source: str | Path, trim_range: TrimRange) -> Composition:
        composition = Composition()
        composition.add_track(
            CompositionTrack(
                kind=TrackKind.VIDEO,
                source=Path(source),
                source_start=trim_range.start,
                duration=trim_range.duration,
            )
        )
        return composition

    def _trim(self, source: Path, trim_range: TrimRange, output_path: Path) -> Path:
        info = self.probe.probe(source)
        try:
            trim_range.validate(info.duration)
        except ValueError as exc:
            raise ExportError(str(exc)) from exc
        return self.exporter.run(self.build_composition(source, trim_range), output_path)

    def trim(
        self,
        source: str | Path,
        start: float,
        end: float,
        output_path: str | Path | None = None,
    ) -> Future:
        """Start the export; the future yields the trimmed file path."""
        target = Path(output_path) if output_path else self.default_output_path()
        trim_range = TrimRange(float(start), float(end))
        logger.info("Trimming %s to %.1f-%.1fs -> %s", Path(source).name, start, end, target)
        return self.exporter.runner.submit(f"trim:{target.name}", self._trim, Path(source), trim_range, target)
