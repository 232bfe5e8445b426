# -*- coding: utf-8 -*-
"""Tests for video trimming."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from socialstudio.config import get_default_config
from socialstudio.core.task_runner import TaskRunner
from socialstudio.errors import ExportError
from socialstudio.models.composition import MediaInfo, TrackKind, TrimRange
from socialstudio.pipeline.exporter import CompositionExporter
from socialstudio.pipeline.video_trimmer import VideoTrimmer


def _media_reader(duration: float = 20.0) -> MagicMock:
    reader = MagicMock()
    reader.probe.side_effect = lambda path: MediaInfo(Path(path), duration, has_video=True, has_audio=True)
    return reader


@pytest.fixture
def exporter():
    mock = MagicMock()
    mock.runner = TaskRunner(max_workers=1)
    mock.run.side_effect = lambda composition, output_path: output_path
    yield mock
    mock.runner.shutdown()


def test_trim_builds_picture_only_composition(exporter, tmp_path: Path) -> None:
    trimmer = VideoTrimmer(exporter=exporter, temp_dir=tmp_path, probe=_media_reader())

    result = trimmer.trim(tmp_path / "source.mov", 5, 10).result(timeout=5)

    composition, target = exporter.run.call_args.args
    assert result == target == tmp_path / "trimmed.mov"
    assert composition.duration == pytest.approx(5.0)
    [track] = composition.tracks
    assert track.kind is TrackKind.VIDEO
    assert track.source_start == 5.0


def test_trim_of_twenty_second_clip_exports_five_seconds(tmp_path: Path) -> None:
    runner = TaskRunner(max_workers=1)
    exporter = CompositionExporter(runner=runner, ffmpeg_path="ffmpeg")
    trimmer = VideoTrimmer(exporter, temp_dir=tmp_path, probe=_media_reader(20.0))
    commands: list[list[str]] = []

    def _fake_ffmpeg(cmd, **kwargs):
        commands.append(cmd)
        Path(cmd[-1]).write_bytes(b"mov")
        return MagicMock(returncode=0, stderr="")

    with patch("socialstudio.pipeline.exporter.subprocess.run", side_effect=_fake_ffmpeg):
        result = trimmer.trim(tmp_path / "source.mov", 5, 10).result(timeout=5)
    runner.shutdown()

    assert result == tmp_path / "trimmed.mov"
    [cmd] = commands
    assert cmd[cmd.index("-ss") + 1] == "5.000"
    # Output duration is the last -t in the command.
    assert cmd[len(cmd) - 1 - cmd[::-1].index("-t") + 1] == "5.000"


@pytest.mark.parametrize(("start", "end"), [(10, 5), (5, 5), (5, 25), (-1, 4)])
def test_invalid_range_fails_without_exporting(exporter, tmp_path: Path, start: float, end: float) -> None:
    trimmer = VideoTrimmer(exporter=exporter, temp_dir=tmp_path, probe=_media_reader(20.0))

    future = trimmer.trim(tmp_path / "source.mov", start, end)

    assert isinstance(future.exception(timeout=5), ExportError)
    exporter.run.assert_not_called()


def test_explicit_output_path(exporter, tmp_path: Path) -> None:
    trimmer = VideoTrimmer(exporter=exporter, probe=_media_reader())
    trimmer.trim("a.mov", 0, 2, tmp_path / "mine.mov").result(timeout=5)
    assert exporter.run.call_args.args[1] == tmp_path / "mine.mov"


def test_from_config_uses_media_settings(exporter, tmp_path: Path) -> None:
    config = get_default_config()
    config["media"]["temp_dir"] = str(tmp_path)
    config["media"]["trim_output_name"] = "cut.mov"
    trimmer = VideoTrimmer.from_config(config, exporter=exporter)
    assert trimmer.default_output_path() == tmp_path / "cut.mov"


def test_trim_range_validation() -> None:
    TrimRange(0, 20).validate(20)
    for start, end in ((5, 5), (-1, 3), (3, 25), (8, 2)):
        with pytest.raises(ValueError):
            TrimRange(start, end).validate(20)


def test_slider_limits_keep_one_second_gap() -> None:
    assert TrimRange.start_slider_max(10) == 9
    assert TrimRange.start_slider_max(0.5) == 0
    assert TrimRange.end_slider_min(5, 20) == 6
    assert TrimRange.end_slider_min(19.5, 20) == 20
    assert TrimRange(9.8, 10).constrained(20) == TrimRange(9.0, 10.0)
