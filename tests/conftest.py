# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def sample_image() -> Image.Image:
    """40x30 RGB noise, the same pixels on every run."""
    rng = np.random.RandomState(0)
    pixels = rng.randint(0, 256, size=(30, 40, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def sample_png_bytes(sample_image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    sample_image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def default_config() -> dict:
    from socialstudio.config import get_default_config

    return get_default_config()


@pytest.fixture
def qt_app():
    pytest.importorskip("PyQt6")
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class _FakeResponse:
    """Stand-in for the object returned by urllib.request.urlopen."""

    def __init__(self, body: bytes = b"{}", status: int = 200) -> None:
        self.body = body
        self.status = status

    def read(self) -> bytes:
        return self.body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


@pytest.fixture
def fake_response():
    return _FakeResponse
