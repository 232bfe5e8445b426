# -*- coding: utf-8 -*-
"""Feed carousel paging model."""

from __future__ import annotations

import time


class CarouselModel:
    """Auto-advancing page index that pauses while the user drags.

    ``tick`` is driven by a timer every ``interval`` seconds; auto-advance
    resumes ``resume_delay`` seconds after the drag ends.
    """

    def __init__(self, item_count: int, interval: float = 3.0, resume_delay: float = 2.0) -> None:
        self.item_count = int(item_count)
        self.interval = interval
        self.resume_delay = resume_delay
        self.current_index = 0
        self.is_user_interacting = False
        self._resume_at: float | None = None

    def begin_interaction(self) -> None:
        self.is_user_interacting = True
        self._resume_at = None

    def end_interaction(self, now: float | None = None) -> None:
        current = time.monotonic() if now is None else now
        self._resume_at = current + self.resume_delay

    def select(self, index: int) -> None:
        if self.item_count:
            self.current_index = index % self.item_count

    def tick(self, now: float | None = None) -> int:
        current = time.monotonic() if now is None else now
        if self._resume_at is not None and current >= self._resume_at:
            self.is_user_interacting = False
            self._resume_at = None
        if self.is_user_interacting or self.item_count == 0:
            return self.current_index
        self.current_index = (self.current_index + 1) % self.item_count
        return self.current_index
