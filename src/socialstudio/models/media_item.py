# -*- coding: utf-8 -*-
"""Media item data model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from socialstudio.utils.image_utils import decode_image


@dataclass(frozen=True)
class MediaItem:
    """The asset being edited: encoded image bytes or a video file, never both."""

    image_data: bytes | None = None
    video_path: Path | None = None

    def __post_init__(self) -> None:
        if (self.image_data is None) == (self.video_path is None):
            raise ValueError("MediaItem needs exactly one of image_data or video_path")

    @classmethod
    def from_image(cls, data: bytes) -> MediaItem:
        return cls(image_data=bytes(data))

    @classmethod
    def from_video(cls, path: str | Path) -> MediaItem:
        return cls(video_path=Path(path))

    @property
    def is_image(self) -> bool:
        return self.image_data is not None

    @property
    def is_video(self) -> bool:
        return self.video_path is not None

    def load_image(self) -> Image.Image | None:
        """Decode the image variant; video items have no still image."""
        if self.image_data is None:
            return None
        return decode_image(self.image_data)
