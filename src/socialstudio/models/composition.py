# -*- coding: utf-8 -*-
"""Track composition data model used as export input."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class TrackKind(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"


@dataclass(frozen=True)
class TrimRange:
    """Requested sub-interval of a video, in seconds."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def validate(self, source_duration: float) -> None:
        if not (0 <= self.start < self.end <= source_duration):
            raise ValueError(
                f"Trim range {self.start:.3f}-{self.end:.3f}s is outside 0-{source_duration:.3f}s"
            )

    @staticmethod
    def start_slider_max(end: float) -> float:
        return max(0.0, end - 1.0)

    @staticmethod
    def end_slider_min(start: float, source_duration: float) -> float:
        return min(source_duration, start + 1.0)

    def constrained(self, source_duration: float) -> TrimRange:
        """Apply the mutually constrained slider limits to this range."""
        end = min(max(self.end, 1.0), source_duration)
        start = min(max(0.0, self.start), self.start_slider_max(end))
        end = max(end, self.end_slider_min(start, source_duration))
        return TrimRange(start=start, end=end)


@dataclass(frozen=True)
class CompositionTrack:
    """One source stream placed on the output timeline."""

    kind: TrackKind
    source: Path
    source_start: float
    duration: float
    insert_at: float = 0.0
    stream_index: int = 0

    @property
    def end(self) -> float:
        return self.insert_at + self.duration


@dataclass
class Composition:
    """Tracks aligned on a shared timeline starting at zero."""

    tracks: list[CompositionTrack] = field(default_factory=list)

    def add_track(self, track: CompositionTrack) -> None:
        self.tracks.append(track)

    @property
    def video_tracks(self) -> list[CompositionTrack]:
        return [track for track in self.tracks if track.kind is TrackKind.VIDEO]

    @property
    def audio_tracks(self) -> list[CompositionTrack]:
        return [track for track in self.tracks if track.kind is TrackKind.AUDIO]

    @property
    def duration(self) -> float:
        return max((track.end for track in self.tracks), default=0.0)


@dataclass(frozen=True)
class MediaInfo:
    """Probe result for a media file."""

    path: Path
    duration: float
    has_video: bool
    has_audio: bool
    width: int = 0
    height: int = 0
