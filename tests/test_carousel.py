# -*- coding: utf-8 -*-
"""Tests for the feed carousel model."""

from __future__ import annotations

from socialstudio.core.carousel import CarouselModel


def test_tick_advances_and_wraps() -> None:
    carousel = CarouselModel(item_count=3)
    assert [carousel.tick(now=t) for t in range(4)] == [1, 2, 0, 1]


def test_interaction_pauses_until_resume_delay() -> None:
    carousel = CarouselModel(item_count=3, resume_delay=2.0)
    carousel.begin_interaction()
    assert carousel.tick(now=10.0) == 0
    carousel.end_interaction(now=10.0)
    assert carousel.tick(now=11.0) == 0
    assert carousel.tick(now=12.0) == 1
    assert carousel.is_user_interacting is False


def test_select_wraps_index() -> None:
    carousel = CarouselModel(item_count=4)
    carousel.select(6)
    assert carousel.current_index == 2


def test_empty_carousel_stays_put() -> None:
    carousel = CarouselModel(item_count=0)
    assert carousel.tick(now=0.0) == 0
