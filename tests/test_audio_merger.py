# -*- coding: utf-8 -*-
"""Tests for audio merging."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from socialstudio.core.task_runner import TaskRunner
from socialstudio.errors import MissingTrackError
from socialstudio.models.composition import MediaInfo, TrackKind
from socialstudio.pipeline.audio_merger import AudioMerger


@pytest.fixture
def exporter():
    mock = MagicMock()
    mock.runner = TaskRunner(max_workers=1)
    yield mock
    mock.runner.shutdown()


def test_merge_without_video_track_fails_before_export(exporter, tmp_path: Path) -> None:
    reader = MagicMock()
    reader.probe.return_value = MediaInfo(tmp_path / "voice.m4a", 20.0, has_video=False, has_audio=True)
    merger = AudioMerger(exporter=exporter, probe=reader)

    future = merger.merge(tmp_path / "voice.m4a", tmp_path / "song.m4a", tmp_path / "out.mov")

    assert isinstance(future.exception(timeout=5), MissingTrackError)
    exporter.run.assert_not_called()
    reader.probe.assert_called_once()


def test_merge_keeps_original_sound_and_adds_track(exporter, tmp_path: Path) -> None:
    video = MediaInfo(tmp_path / "clip.mov", 20.0, has_video=True, has_audio=True)
    audio = MediaInfo(tmp_path / "song.m4a", 35.0, has_video=False, has_audio=True)
    reader = MagicMock()
    reader.probe.side_effect = [video, audio]
    exporter.run.return_value = tmp_path / "out.mov"
    merger = AudioMerger(exporter=exporter, probe=reader)

    result = merger.merge(video.path, audio.path, tmp_path / "out.mov").result(timeout=5)

    assert result == tmp_path / "out.mov"
    composition = exporter.run.call_args.args[0]
    assert [t.kind for t in composition.tracks] == [TrackKind.VIDEO, TrackKind.AUDIO, TrackKind.AUDIO]
    assert [t.source for t in composition.tracks] == [video.path, video.path, audio.path]
    assert all(t.insert_at == 0 and t.duration == 20.0 for t in composition.tracks)
    assert exporter.run.call_args.kwargs["faststart"] is True


def test_silent_video_gets_only_the_new_track(exporter, tmp_path: Path) -> None:
    merger = AudioMerger(exporter=exporter, probe=MagicMock())
    composition = merger.build_composition(
        MediaInfo(tmp_path / "clip.mov", 8.0, has_video=True, has_audio=False),
        MediaInfo(tmp_path / "song.m4a", 3.0, has_video=False, has_audio=True),
    )
    assert [t.kind for t in composition.tracks] == [TrackKind.VIDEO, TrackKind.AUDIO]
    assert composition.duration == 8.0


def test_build_composition_rejects_audio_only_source(exporter, tmp_path: Path) -> None:
    merger = AudioMerger(exporter=exporter, probe=MagicMock())
    with pytest.raises(MissingTrackError):
        merger.build_composition(
            MediaInfo(tmp_path / "a.m4a", 8.0, has_video=False, has_audio=True),
            MediaInfo(tmp_path / "b.m4a", 3.0, has_video=False, has_audio=True),
        )
