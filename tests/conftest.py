import sys
import threading
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image

from albumpress.errors import TransformFailure


def make_image(path: Path, size=(64, 48), color=(200, 40, 40), exif=None) -> Path:
    img = Image.new("RGB", size, color)
    if exif is not None:
        img.save(path, exif=exif)
    else:
        img.save(path)
    return path


class CountingTransform:
    """Writes tiny marker files instead of images and records every call."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)
        self._lock = threading.Lock()

    def _make(self, kind, src, dst, size):
        with self._lock:
            self.calls.append((kind, Path(src).name, size))
        if Path(src).name in self.fail_on:
            raise TransformFailure(src, "cannot identify image file")
        Path(dst).write_bytes(f"{kind} {size}".encode())

    def make_thumbnail(self, src, dst, size):
        self._make("thumbnail", src, dst, size)

    def make_large(self, src, dst, size):
        self._make("large", src, dst, size)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def counting_transform():
    return CountingTransform()


@pytest.fixture
def photo_dir(tmp_path):
    """Three small JPEGs plus an album file describing them."""
    src = tmp_path / "originals"
    src.mkdir()
    make_image(src / "a.jpg", (80, 40), (255, 0, 0))
    make_image(src / "b.jpg", (40, 80), (0, 255, 0))
    make_image(src / "c.jpg", (30, 30), (0, 0, 255))
    (src / "images.txt").write_text(
        "a.jpg\n"
        "Tag: x\n"
        "\n"
        "b.jpg\n"
        "A dog\n"
        "Tag: x, y\n"
        "\n"
        "c.jpg\n"
        "A <cat> & co\n",
        encoding="utf-8",
    )
    return src
