# -*- coding: utf-8 -*-
"""Single-image colour and blur filters."""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from socialstudio.models.edit_context import FilterKind, FilterSelection

logger = logging.getLogger(__name__)

SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)

VIVID_SATURATION = 1.2
VIVID_BRIGHTNESS = 0.8
VIVID_CONTRAST = 1.1
NOIR_CONTRAST = 1.5
BLUR_MAX_RADIUS = 10.0
CONTRAST_MAX_FACTOR = 2.0

# Intensity used when a filter is given as a bare kind. These reproduce the
# neutral defaults of the mobile client: full sepia, radius-10 blur, contrast 1.0.
DEFAULT_INTENSITY: dict[FilterKind, float] = {
    FilterKind.SEPIA: 1.0,
    FilterKind.BLUR: 1.0,
    FilterKind.CONTRAST: 0.5,
}


def _sepia(image: Image.Image, intensity: float) -> Image.Image:
    pixels = np.asarray(image, dtype=np.float32)
    toned = np.clip(pixels @ SEPIA_MATRIX.T, 0, 255)
    blended = pixels * (1.0 - intensity) + toned * intensity
    return Image.fromarray(np.rint(blended).astype(np.uint8))


def _noir(image: Image.Image, intensity: float) -> Image.Image:
    del intensity
    gray = ImageOps.autocontrast(ImageOps.grayscale(image))
    return ImageEnhance.Contrast(gray).enhance(NOIR_CONTRAST).convert("RGB")


def _mono(image: Image.Image, intensity: float) -> Image.Image:
    del intensity
    return ImageOps.grayscale(image).convert("RGB")


def _vivid(image: Image.Image, intensity: float) -> Image.Image:
    del intensity
    result = ImageEnhance.Color(image).enhance(VIVID_SATURATION)
    result = ImageEnhance.Brightness(result).enhance(VIVID_BRIGHTNESS)
    return ImageEnhance.Contrast(result).enhance(VIVID_CONTRAST)


def _blur(image: Image.Image, intensity: float) -> Image.Image:
    radius = intensity * BLUR_MAX_RADIUS
    if radius <= 0:
        return image.copy()
    return image.filter(ImageFilter.GaussianBlur(radius=radius))


def _contrast(image: Image.Image, intensity: float) -> Image.Image:
    return ImageEnhance.Contrast(image).enhance(intensity * CONTRAST_MAX_FACTOR)


_FILTERS: dict[FilterKind, Callable[[Image.Image, float], Image.Image]] = {
    FilterKind.SEPIA: _sepia,
    FilterKind.NOIR: _noir,
    FilterKind.MONO: _mono,
    FilterKind.VIVID: _vivid,
    FilterKind.BLUR: _blur,
    FilterKind.CONTRAST: _contrast,
}


def as_selection(entry: FilterKind | FilterSelection | str) -> FilterSelection:
    """Normalize a filter list entry; unknown names become the identity filter."""
    if isinstance(entry, FilterSelection):
        return entry
    try:
        kind = FilterKind(entry)
    except ValueError:
        logger.warning("Unknown filter %r treated as no-op", entry)
        return FilterSelection(FilterKind.NONE)
    return FilterSelection(kind, DEFAULT_INTENSITY.get(kind, 1.0))


def apply_filter(image: Image.Image, entry: FilterKind | FilterSelection | str) -> Image.Image:
    """Return a filtered copy of ``image``; the input is never modified."""
    selection = as_selection(entry)
    transform = _FILTERS.get(selection.kind)
    if transform is None:
        return image.copy()

    alpha = None
    if image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        alpha = rgba.getchannel("A")
        rgb = rgba.convert("RGB")
    else:
        rgb = image.convert("RGB")

    result = transform(rgb, selection.intensity)
    if alpha is not None:
        result = result.convert("RGB")
        result.putalpha(alpha)
    return result
