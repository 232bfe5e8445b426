# -*- coding: utf-8 -*-
"""ffprobe wrapper returning stream layout and duration."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any

from socialstudio.errors import MediaError, ToolNotFoundError
from socialstudio.models.composition import MediaInfo

logger = logging.getLogger(__name__)


def find_tool(name: str) -> str:
    """Locate an ffmpeg-suite binary on PATH."""
    path = shutil.which(name) or shutil.which(f"{name}.exe")
    if not path:
        raise ToolNotFoundError(f"{name} not found on PATH (required for video)")
    return path


class MediaProbe:
    """Read duration and track presence from a media file."""

    def __init__(self, ffprobe_path: str | None = None) -> None:
        self.ffprobe_path = ffprobe_path

    def probe(self, path: str | Path) -> MediaInfo:
        media_path = Path(path)
        if not media_path.exists():
            raise MediaError(f"Media file not found: {media_path}")

        cmd = [
            self.ffprobe_path or find_tool("ffprobe"),
            "-v", "error",
            "-show_format",
            "-show_streams",
            "-of", "json",
            str(media_path),
        ]
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise MediaError(f"ffprobe failed for {media_path.name}: {result.stderr.strip()}")
        try:
            data = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise MediaError(f"ffprobe returned invalid JSON for {media_path.name}") from exc
        return self._parse(media_path, data)

    def _parse(self, path: Path, data: dict[str, Any]) -> MediaInfo:
        streams = data.get("streams") or []
        # Cover art in audio files shows up as a video stream flagged attached_pic.
        video_streams = [
            s for s in streams
            if s.get("codec_type") == "video" and not (s.get("disposition") or {}).get("attached_pic")
        ]
        audio_streams = [s for s in streams if s.get("codec_type") == "audio"]

        duration = _to_float((data.get("format") or {}).get("duration"))
        if duration <= 0:
            duration = max((_to_float(s.get("duration")) for s in streams), default=0.0)

        first_video = video_streams[0] if video_streams else {}
        info = MediaInfo(
            path=path,
            duration=duration,
            has_video=bool(video_streams),
            has_audio=bool(audio_streams),
            width=int(first_video.get("width", 0) or 0),
            height=int(first_video.get("height", 0) or 0),
        )
        logger.debug("Probed %s: %s", path.name, info)
        return info


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
