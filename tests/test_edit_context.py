# -*- coding: utf-8 -*-
"""Tests for media items, edit contexts and the media editor."""

from __future__ import annotations

from pathlib import Path

import pytest

from socialstudio.core.media_editor import MediaEditor
from socialstudio.models.edit_context import CropRect, EditContext, FilterKind, FilterSelection
from socialstudio.models.media_item import MediaItem


def test_media_item_requires_exactly_one_variant(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        MediaItem()
    with pytest.raises(ValueError):
        MediaItem(image_data=b"x", video_path=tmp_path / "a.mov")


def test_media_item_variants(sample_png_bytes: bytes, tmp_path: Path) -> None:
    image_item = MediaItem.from_image(sample_png_bytes)
    video_item = MediaItem.from_video(str(tmp_path / "a.mov"))
    assert image_item.is_image and not image_item.is_video
    assert video_item.is_video and video_item.video_path == tmp_path / "a.mov"
    assert image_item.load_image().size == (40, 30)
    assert video_item.load_image() is None


def test_fresh_context_is_not_edited(sample_png_bytes: bytes) -> None:
    context = EditContext(media=MediaItem.from_image(sample_png_bytes))
    assert context.is_edited is False


def test_each_edit_marks_context_edited(sample_png_bytes: bytes) -> None:
    media = MediaItem.from_image(sample_png_bytes)

    rotated = EditContext(media=media)
    rotated.rotate(90)
    filtered = EditContext(media=media)
    filtered.apply_filter("sepia")
    cropped = EditContext(media=media)
    cropped.crop(CropRect(0, 0, 5, 5))

    assert rotated.is_edited and filtered.is_edited and cropped.is_edited
    assert filtered.filters == [FilterKind.SEPIA]


def test_reset_clears_edits(sample_png_bytes: bytes) -> None:
    context = EditContext(media=MediaItem.from_image(sample_png_bytes))
    context.rotate(45)
    context.apply_filter(FilterKind.MONO)
    context.reset()
    assert context.is_edited is False


def test_crop_rect_from_points_any_direction() -> None:
    assert CropRect.from_points((10, 2), (4, 8)) == CropRect(4, 2, 6, 6)
    assert CropRect.from_points((1, 1), (1, 5)).is_empty


def test_filter_display_names() -> None:
    assert FilterKind.NONE.display_name == "Original"
    assert FilterKind.NOIR.display_name == "Noir"


def test_media_editor_renders_on_demand(sample_png_bytes: bytes) -> None:
    editor = MediaEditor(EditContext(media=MediaItem.from_image(sample_png_bytes)))
    assert editor.current_filter is FilterKind.NONE

    editor.apply(FilterSelection(FilterKind.BLUR, 0.2))
    editor.rotate(90)
    editor.crop(CropRect(0, 0, 10, 10))

    assert editor.is_edited
    assert editor.current_filter is FilterKind.BLUR
    assert editor.render_final_image().size == (10, 10)

    editor.rotate(-90)
    editor.crop(CropRect(0, 0, 40, 30))
    assert editor.render_final_image().size == (40, 30)


def test_unknown_filter_name_is_recorded_as_identity(sample_png_bytes: bytes) -> None:
    from socialstudio.pipeline.render import render_context

    context = EditContext(media=MediaItem.from_image(sample_png_bytes))
    context.apply_filter("bogus")
    assert context.filters == [FilterKind.NONE]
    assert render_context(context).tobytes() == context.media.load_image().tobytes()
