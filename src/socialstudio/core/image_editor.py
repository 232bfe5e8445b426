# -*- coding: utf-8 -*-
"""Interactive image editor: live filter preview and drag-to-crop."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PIL import Image

from socialstudio.constants import DEFAULT_DISPLAY_SIZE
from socialstudio.models.edit_context import CropRect, FilterKind, FilterSelection
from socialstudio.pipeline.render import crop_image, render, scale_image

logger = logging.getLogger(__name__)

Point = tuple[float, float]

MIN_SCALE = 0.5
MAX_SCALE = 2.0


class EditorState(str, Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    CROP_DRAGGING = "crop_dragging"
    CROP_PREVIEW = "crop_preview"
    APPLIED = "applied"
    CANCELLED = "cancelled"


@dataclass
class ImageBinding:
    """Caller-owned slot the editor commits into on apply."""

    image: Image.Image | None


class ImageEditor:
    """Editing session for one image.

    Every filter, intensity, rotation or scale change re-renders the working
    image synchronously. The crop rectangle lives in display coordinates
    (the on-screen frame of ``display_size``) until apply maps it to pixels.
    """

    def __init__(self, binding: ImageBinding, display_size: tuple[float, float] = DEFAULT_DISPLAY_SIZE) -> None:
        if display_size[0] <= 0 or display_size[1] <= 0:
            raise ValueError("display_size must be positive")
        self.binding = binding
        self.display_size = display_size
        self.source = binding.image
        self.current_image = binding.image.copy() if binding.image is not None else None
        self.state = EditorState.IDLE
        self.selection = FilterSelection()
        self.rotation_degrees = 0.0
        self.scale = 1.0
        self.crop_rect: CropRect | None = None
        self._anchor: Point | None = None

    @classmethod
    def from_config(cls, binding: ImageBinding, config: dict[str, Any]) -> ImageEditor:
        """Editor sized to the configured on-screen frame."""
        media = config.get("media", {})
        width = float(media.get("display_width", DEFAULT_DISPLAY_SIZE[0]))
        height = float(media.get("display_height", DEFAULT_DISPLAY_SIZE[1]))
        return cls(binding, display_size=(width, height))

    @property
    def is_closed(self) -> bool:
        return self.state in (EditorState.APPLIED, EditorState.CANCELLED)

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise RuntimeError(f"Editor already {self.state.value}")

    def _render_working(self) -> Image.Image | None:
        if self.source is None:
            return None
        rendered = render(self.source, self.rotation_degrees, [self.selection])
        return scale_image(rendered, self.scale)

    def _preview(self) -> None:
        self.state = EditorState.PREVIEWING
        self.current_image = self._render_working()

    def set_filter(self, kind: FilterKind | str) -> None:
        self._ensure_open()
        self.selection = FilterSelection(FilterKind(kind), self.selection.intensity)
        self._preview()

    def set_intensity(self, intensity: float) -> None:
        self._ensure_open()
        self.selection = FilterSelection(self.selection.kind, intensity)
        self._preview()

    def rotate(self, degrees: float) -> None:
        self._ensure_open()
        self.rotation_degrees += float(degrees)
        self._preview()

    def set_scale(self, scale: float) -> None:
        self._ensure_open()
        self.scale = min(MAX_SCALE, max(MIN_SCALE, float(scale)))
        self._preview()

    def pointer_down(self, point: Point) -> None:
        self._ensure_open()
        self._anchor = point
        self.crop_rect = CropRect.from_points(point, point)
        self.state = EditorState.CROP_DRAGGING

    def pointer_move(self, point: Point) -> None:
        self._ensure_open()
        if self._anchor is None:
            self.pointer_down(point)
            return
        self.crop_rect = CropRect.from_points(self._anchor, point)

    def pointer_up(self) -> None:
        self._ensure_open()
        self._anchor = None
        if self.crop_rect is None or self.crop_rect.is_empty:
            self.crop_rect = None
            self.state = EditorState.PREVIEWING
            return
        self.state = EditorState.CROP_PREVIEW

    def apply(self) -> Image.Image | None:
        """Render, crop, and commit into the binding."""
        self._ensure_open()
        rendered = self._render_working()
        if rendered is None:
            logger.warning("No source pixels available, leaving image unchanged")
            self.state = EditorState.APPLIED
            return self.binding.image

        if self.crop_rect is not None:
            sx = rendered.width / self.display_size[0]
            sy = rendered.height / self.display_size[1]
            rendered = crop_image(rendered, self.crop_rect.scaled(sx, sy))

        self.current_image = rendered
        self.binding.image = rendered
        self.crop_rect = None
        self._anchor = None
        self.state = EditorState.APPLIED
        return rendered

    def cancel(self) -> None:
        self._ensure_open()
        self.crop_rect = None
        self._anchor = None
        self.current_image = None
        self.state = EditorState.CANCELLED
