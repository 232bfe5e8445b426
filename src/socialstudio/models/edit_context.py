# -*- coding: utf-8 -*-
"""Edit intent data model: filters, crop rectangle, rotation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from socialstudio.models.media_item import MediaItem

logger = logging.getLogger(__name__)


class FilterKind(str, Enum):
    NONE = "none"
    SEPIA = "sepia"
    NOIR = "noir"
    MONO = "mono"
    VIVID = "vivid"
    BLUR = "blur"
    CONTRAST = "contrast"

    @property
    def display_name(self) -> str:
        if self is FilterKind.NONE:
            return "Original"
        return self.value.capitalize()


@dataclass(frozen=True)
class FilterSelection:
    """A single filter with its intensity in 0..1."""

    kind: FilterKind = FilterKind.NONE
    intensity: float = 0.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FilterKind(self.kind))
        object.__setattr__(self, "intensity", min(1.0, max(0.0, float(self.intensity))))

    @property
    def is_active(self) -> bool:
        return self.kind is not FilterKind.NONE


@dataclass(frozen=True)
class CropRect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_points(cls, p1: tuple[float, float], p2: tuple[float, float]) -> CropRect:
        """Normalized bounding box of two points, whatever the drag direction."""
        return cls(
            x=min(p1[0], p2[0]),
            y=min(p1[1], p2[1]),
            width=abs(p1[0] - p2[0]),
            height=abs(p1[1] - p2[1]),
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def scaled(self, sx: float, sy: float) -> CropRect:
        return CropRect(self.x * sx, self.y * sy, self.width * sx, self.height * sy)

    def as_box(self) -> tuple[float, float, float, float]:
        """Return (left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass
class EditContext:
    """Accumulated edit intent for one media item.

    Rotation is additive and filters apply in insertion order.
    """

    media: MediaItem
    filters: list[FilterKind | FilterSelection] = field(default_factory=list)
    crop_rect: CropRect | None = None
    rotation_degrees: float = 0.0

    @property
    def is_edited(self) -> bool:
        return self.crop_rect is not None or self.rotation_degrees != 0 or bool(self.filters)

    def apply_filter(self, selection: FilterKind | FilterSelection | str) -> None:
        """Append a filter to the chain.

        Names are matched against :class:`FilterKind`. An unknown name is
        recorded as ``FilterKind.NONE`` and logged, the same identity filter
        the renderer falls back to, so editing never fails on a stale name.
        """
        if isinstance(selection, str) and not isinstance(selection, FilterKind):
            try:
                selection = FilterKind(selection)
            except ValueError:
                logger.warning("Unknown filter %r recorded as no-op", selection)
                selection = FilterKind.NONE
        self.filters.append(selection)

    def rotate(self, degrees: float) -> None:
        self.rotation_degrees += float(degrees)

    def crop(self, rect: CropRect) -> None:
        self.crop_rect = rect

    def reset(self) -> None:
        self.filters.clear()
        self.crop_rect = None
        self.rotation_degrees = 0.0
