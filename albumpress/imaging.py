"""Derived image names and the Pillow transforms that produce them."""

from pathlib import Path
from typing import Protocol

from PIL import ExifTags, Image, ImageOps

from .errors import InvalidFilename, TransformFailure
from .files import copy_file, staged
from .models import SizeMode

JPEG_QUALITY = 85


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def split_filename(filename: str) -> tuple[str, str]:
    """Split into (basename, extension). Exactly one '.' is allowed.

    Names like photo.v2.jpg are rejected rather than guessed at.
    """
    pieces = filename.split(".")
    if len(pieces) != 2:
        raise InvalidFilename(filename)
    return pieces[0], pieces[1]


def large_filename(filename: str, size: int) -> str:
    base, ext = split_filename(filename)
    return f"{base}_{size}.{ext}"


def thumbnail_filename(filename: str, size: int) -> str:
    base, ext = split_filename(filename)
    return f"{base}_{size}_{size}.{ext}"


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

class ImageTransform(Protocol):
    """Anything that can write the two derived variants of a source image."""

    def make_thumbnail(self, src: Path, dst: Path, size: int) -> None: ...

    def make_large(self, src: Path, dst: Path, size: int) -> None: ...


def _scaled(size: tuple[int, int], factor: float) -> tuple[int, int]:
    w, h = size
    return max(1, round(w * factor)), max(1, round(h * factor))


def square_crop(img: Image.Image, size: int) -> Image.Image:
    """Resize so the shorter side is `size`, then center crop to a square.

    Landscape images lose their left and right margins, portrait images
    their top and bottom.
    """
    w, h = img.size
    nw, nh = _scaled((w, h), size / min(w, h))
    # Rounding may leave the short side a pixel off
    nw, nh = max(nw, size), max(nh, size)
    img = img.resize((nw, nh), Image.Resampling.LANCZOS)
    left = (nw - size) // 2
    top = (nh - size) // 2
    return img.crop((left, top, left + size, top + size))


def fit_within(img: Image.Image, size: int) -> Image.Image:
    """Shrink so the longest side is at most `size`. Never enlarges."""
    w, h = img.size
    if max(w, h) <= size:
        return img
    return img.resize(_scaled((w, h), size / max(w, h)), Image.Resampling.LANCZOS)


def _needs_rotation(img: Image.Image) -> bool:
    return img.getexif().get(ExifTags.Base.Orientation, 1) != 1


def _save(img: Image.Image, dst: Path) -> None:
    """Save in the format the extension of dst names."""
    fmt = Image.registered_extensions().get(dst.suffix.lower())
    if fmt is None:
        raise ValueError(f"no image format for extension {dst.suffix!r}")

    options = {}
    if fmt == "JPEG":
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        options["quality"] = JPEG_QUALITY

    with staged(dst) as tmp:
        img.save(tmp, fmt, **options)


class PillowTransform:
    """ImageTransform backed by Pillow.

    In "pixels" mode sizes are pixel lengths: thumbnails are square crops of
    that side, large images have their longest side capped. In the legacy
    "percent" mode both variants are the source scaled to that percentage.
    """

    def __init__(self, size_mode: SizeMode = "pixels"):
        self.size_mode = size_mode

    def make_thumbnail(self, src: Path, dst: Path, size: int) -> None:
        try:
            with Image.open(src) as img:
                img = ImageOps.exif_transpose(img)
                if self.size_mode == "percent":
                    img = img.resize(_scaled(img.size, size / 100), Image.Resampling.LANCZOS)
                else:
                    img = square_crop(img, size)
                _save(img, dst)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise TransformFailure(src, str(e)) from e

    def make_large(self, src: Path, dst: Path, size: int) -> None:
        try:
            with Image.open(src) as img:
                if self.size_mode == "pixels" and max(img.size) <= size and not _needs_rotation(img):
                    copy_file(src, dst)
                    return
                img = ImageOps.exif_transpose(img)
                if self.size_mode == "percent":
                    img = img.resize(_scaled(img.size, size / 100), Image.Resampling.LANCZOS)
                else:
                    img = fit_within(img, size)
                _save(img, dst)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise TransformFailure(src, str(e)) from e
