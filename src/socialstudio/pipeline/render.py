# -*- coding: utf-8 -*-
"""Stateless image render pipeline: rotate, then filter, then crop."""

from __future__ import annotations

import logging
from typing import Sequence

from PIL import Image

from socialstudio.models.edit_context import CropRect, EditContext, FilterKind, FilterSelection
from socialstudio.pipeline.filters import apply_filter

logger = logging.getLogger(__name__)


def rotate_image(image: Image.Image, degrees: float) -> Image.Image:
    """Rotate clockwise about the centre onto the rotated bounding box.

    Multiples of 90 degrees are lossless transposes.
    """
    angle = float(degrees) % 360.0
    if angle == 0:
        return image.copy()
    return image.rotate(-angle, resample=Image.Resampling.BICUBIC, expand=True)


def scale_image(image: Image.Image, factor: float) -> Image.Image:
    if factor == 1:
        return image.copy()
    width = max(1, round(image.width * factor))
    height = max(1, round(image.height * factor))
    return image.resize((width, height), resample=Image.Resampling.LANCZOS)


def crop_image(image: Image.Image, rect: CropRect) -> Image.Image:
    """Crop to the part of ``rect`` inside the image.

    A rectangle that misses the image entirely leaves it unchanged.
    """
    left, top, right, bottom = rect.as_box()
    box = (
        max(0, round(left)),
        max(0, round(top)),
        min(image.width, round(right)),
        min(image.height, round(bottom)),
    )
    if box[2] <= box[0] or box[3] <= box[1]:
        logger.debug("Crop %s outside %sx%s image, ignored", rect, image.width, image.height)
        return image
    return image.crop(box)


def render(
    source_image: Image.Image,
    rotation_degrees: float = 0.0,
    ordered_filters: Sequence[FilterKind | FilterSelection | str] = (),
    crop_rect: CropRect | None = None,
) -> Image.Image:
    """Produce the output image for a set of edits; the source is left untouched.

    Crop coordinates refer to the image after rotation and filtering.
    """
    image = rotate_image(source_image, rotation_degrees)
    for entry in ordered_filters:
        image = apply_filter(image, entry)
    if crop_rect is not None:
        image = crop_image(image, crop_rect)
    return image


def render_context(context: EditContext) -> Image.Image | None:
    """Render an edit context; video media has no still output."""
    source = context.media.load_image()
    if source is None:
        return None
    return render(source, context.rotation_degrees, context.filters, context.crop_rect)
