# -*- coding: utf-8 -*-
"""Image helper functions built on Pillow."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from socialstudio.constants import JPEG_QUALITY


def decode_image(data: bytes) -> Image.Image:
    """Decode encoded image bytes into a fully loaded Pillow image."""
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def encode_jpeg(image: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    """Encode an image as JPEG; alpha is flattened since JPEG has none."""
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def load_image(path: str | Path) -> Image.Image:
    """Read and decode an image from disk."""
    return decode_image(Path(path).read_bytes())
