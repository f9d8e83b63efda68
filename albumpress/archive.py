"""Zip of an album's original images, offered as a single download."""

import zipfile
from pathlib import Path

from loguru import logger

from .files import staged
from .models import ImageRecord


def zip_filename(album_name: str) -> str:
    return f"{album_name}.zip"


def make_zip(zip_path: Path, images: list[ImageRecord], force: bool = False) -> bool:
    """Write one entry per image, named by its original filename, in album order.

    Returns False when the zip was already there and not forced.
    """
    if zip_path.exists() and not force:
        logger.debug("Exists, skipping: {}", zip_path)
        return False

    logger.info("Making zip file {} ({} images)...", zip_path, len(images))
    with staged(zip_path) as tmp:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED) as z:
            for image in images:
                z.write(image.source_path, arcname=image.filename)

    logger.debug("Wrote zip {}", zip_path)
    return True
