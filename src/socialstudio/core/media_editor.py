# -*- coding: utf-8 -*-
"""Edit-intent view model over an EditContext."""

from __future__ import annotations

from PIL import Image

from socialstudio.models.edit_context import CropRect, EditContext, FilterKind, FilterSelection
from socialstudio.pipeline.render import render_context


class MediaEditor:
    """Accumulates edits and renders the final image on demand (never cached)."""

    def __init__(self, context: EditContext) -> None:
        self.context = context

    def apply(self, selection: FilterKind | FilterSelection | str) -> None:
        self.context.apply_filter(selection)

    def rotate(self, degrees: float) -> None:
        self.context.rotate(degrees)

    def crop(self, rect: CropRect) -> None:
        self.context.crop(rect)

    @property
    def is_edited(self) -> bool:
        return self.context.is_edited

    @property
    def current_filter(self) -> FilterKind:
        if not self.context.filters:
            return FilterKind.NONE
        last = self.context.filters[-1]
        return last.kind if isinstance(last, FilterSelection) else FilterKind(last)

    def render_final_image(self) -> Image.Image | None:
        return render_context(self.context)
