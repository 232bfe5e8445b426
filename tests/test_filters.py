# -*- coding: utf-8 -*-
"""Tests for the individual image filters."""

from __future__ import annotations

from PIL import Image

from socialstudio.models.edit_context import FilterKind, FilterSelection
from socialstudio.pipeline.filters import DEFAULT_INTENSITY, apply_filter, as_selection


def _is_gray(image: Image.Image) -> bool:
    return all(r == g == b for r, g, b in image.convert("RGB").getdata())


def test_none_filter_is_identity(sample_image: Image.Image) -> None:
    result = apply_filter(sample_image, FilterKind.NONE)
    assert result.tobytes() == sample_image.tobytes()
    assert result is not sample_image


def test_unknown_filter_name_is_identity(sample_image: Image.Image) -> None:
    assert as_selection("posterize").kind is FilterKind.NONE
    assert apply_filter(sample_image, "posterize").tobytes() == sample_image.tobytes()


def test_bare_kind_uses_default_intensity() -> None:
    assert as_selection(FilterKind.SEPIA).intensity == DEFAULT_INTENSITY[FilterKind.SEPIA]
    assert as_selection("contrast").intensity == 0.5
    assert as_selection(FilterKind.VIVID).intensity == 1.0


def test_intensity_is_clamped() -> None:
    assert FilterSelection(FilterKind.BLUR, 3.0).intensity == 1.0
    assert FilterSelection(FilterKind.BLUR, -1.0).intensity == 0.0


def test_mono_and_noir_are_grayscale(sample_image: Image.Image) -> None:
    assert _is_gray(apply_filter(sample_image, FilterKind.MONO))
    assert _is_gray(apply_filter(sample_image, FilterKind.NOIR))


def test_sepia_at_zero_intensity_keeps_pixels(sample_image: Image.Image) -> None:
    result = apply_filter(sample_image, FilterSelection(FilterKind.SEPIA, 0.0))
    assert result.tobytes() == sample_image.tobytes()


def test_sepia_tones_white_towards_brown() -> None:
    white = Image.new("RGB", (2, 2), (255, 255, 255))
    r, g, b = apply_filter(white, FilterKind.SEPIA).getpixel((0, 0))
    assert r >= g > b


def test_blur_at_zero_intensity_keeps_pixels(sample_image: Image.Image) -> None:
    result = apply_filter(sample_image, FilterSelection(FilterKind.BLUR, 0.0))
    assert result.tobytes() == sample_image.tobytes()


def test_blur_changes_noise(sample_image: Image.Image) -> None:
    assert apply_filter(sample_image, FilterKind.BLUR).tobytes() != sample_image.tobytes()


def test_filters_keep_size_and_mode(sample_image: Image.Image) -> None:
    for kind in FilterKind:
        result = apply_filter(sample_image, kind)
        assert result.size == sample_image.size
        assert result.mode == "RGB"


def test_alpha_channel_survives_filtering(sample_image: Image.Image) -> None:
    rgba = sample_image.convert("RGBA")
    rgba.putalpha(128)
    result = apply_filter(rgba, FilterKind.MONO)
    assert result.mode == "RGBA"
    assert set(result.getchannel("A").getdata()) == {128}
