"""Build a gallery: several albums under one install root, plus an index page.

A gallery file lists albums as blocks of `key = value` lines:

    # Holidays
    album-name = Spain 2019
    album-dir = /photos/spain
    album-subdir = spain-2019
    album-file = /photos/spain/images.txt
    album-tags = best, family

A new block starts each time album-name appears again. Relative paths are
taken relative to the gallery file.
"""

import os
import random
from pathlib import Path

from loguru import logger

from . import render
from .album import Album
from .errors import AlbumPressError, ConfigError, InstallError, MalformedGalleryFile
from .imaging import ImageTransform
from .models import AlbumConfig, AlbumEntry, GalleryConfig
from .tags import parse_tag_list

KNOWN_KEYS = {"album-name", "album-dir", "album-subdir", "album-file", "album-tags"}
REQUIRED_KEYS = ("album-name", "album-dir", "album-subdir", "album-file")


def parse_gallery_file(path: Path | str) -> list[AlbumEntry]:
    path = Path(path)
    base = path.parent
    entries: list[AlbumEntry] = []
    block: dict[str, str] = {}
    block_start = 0
    lineno = 0

    def finish(at_line: int, line: str):
        missing = [key for key in REQUIRED_KEYS if not block.get(key)]
        if missing:
            raise MalformedGalleryFile(
                path, at_line, line,
                f"album starting at line {block_start} is missing {', '.join(missing)}",
            )
        entries.append(AlbumEntry(
            name=block["album-name"],
            image_dir=base / block["album-dir"],
            subdir=block["album-subdir"],
            album_file=base / block["album-file"],
            tags=parse_tag_list(block.get("album-tags")),
        ))

    try:
        with path.open(encoding="utf-8") as f:
            for lineno, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue

                key, sep, value = line.partition("=")
                key, value = key.strip(), value.strip()
                if not sep:
                    raise MalformedGalleryFile(path, lineno, line, "expected 'key = value'")
                if key not in KNOWN_KEYS:
                    raise MalformedGalleryFile(path, lineno, line, f"unknown key {key!r}")

                if key == "album-name" and "album-name" in block:
                    finish(lineno, line)
                    block = {}
                elif key in block:
                    raise MalformedGalleryFile(
                        path, lineno, line,
                        f"duplicate key {key!r} in album starting at line {block_start}",
                    )
                if not block:
                    block_start = lineno
                block[key] = value
    except UnicodeDecodeError as e:
        raise MalformedGalleryFile(path, 0, "", f"not valid UTF-8 ({e.reason})") from e

    if block:
        finish(lineno, "<end of file>")

    logger.debug("Parsed {} albums from {}", len(entries), path)
    return entries


def check_unique_subdirs(entries: list[AlbumEntry]) -> None:
    """Two albums installed into one directory would overwrite each other."""
    seen: dict[str, str] = {}
    for entry in entries:
        key = os.path.normpath(entry.subdir)
        if key in seen:
            raise ConfigError(
                f"albums {seen[key]!r} and {entry.name!r} share install subdir {entry.subdir!r}"
            )
        seen[key] = entry.name


class Gallery:
    """Albums are built one after another; only resizing inside an album is
    parallel. Any album failing stops the whole gallery."""

    def __init__(self, config: GalleryConfig, transform: ImageTransform | None = None,
                 rng: random.Random | None = None):
        self.config = config
        self.transform = transform
        self.rng = rng or random.Random(config.seed)
        self.albums: list[Album] = []

    def album_config(self, entry: AlbumEntry) -> AlbumConfig:
        cfg = self.config
        return AlbumConfig(
            name=entry.name,
            album_file=entry.album_file,
            image_dir=entry.image_dir,
            install_dir=cfg.install_dir / entry.subdir,
            tags=entry.tags,
            thumb_size=cfg.thumb_size,
            large_size=cfg.large_size,
            size_mode=cfg.size_mode,
            page_size=cfg.page_size,
            workers=cfg.workers,
            include_originals=cfg.include_originals,
            include_zip=cfg.include_zips,
            force_images=cfg.force_images,
            force_html=cfg.force_html,
            force_zip=cfg.force_zip,
            gallery_name=cfg.name,
        )

    def install(self) -> list[render.AlbumLink]:
        cfg = self.config
        try:
            entries = parse_gallery_file(cfg.gallery_file)
            check_unique_subdirs(entries)
            cfg.install_dir.mkdir(parents=True, exist_ok=True)
        except (AlbumPressError, OSError) as e:
            raise InstallError("reading gallery file", cfg.name, str(e)) from e

        links = []
        for entry in entries:
            album = Album(self.album_config(entry), self.transform)
            album.install()
            self.albums.append(album)

            thumb = album.representative(self.rng)
            if thumb is None:
                logger.warning("{}: no images chosen, leaving it off the gallery index",
                               album.name)
                continue
            thumb_url = None
            if thumb.thumbnail_filename:
                thumb_url = f"{entry.subdir}/{thumb.thumbnail_filename}"
            links.append(render.AlbumLink(
                name=album.name,
                url=f"{entry.subdir}/index.html",
                thumb_url=thumb_url,
            ))

        try:
            render.write_stylesheet(cfg.install_dir, force=cfg.force_html)
            render.write_gallery_index(cfg.install_dir, cfg.name, links, force=cfg.force_html)
        except OSError as e:
            raise InstallError("generating gallery index", cfg.name, str(e)) from e

        logger.info("Gallery {}: {} albums installed to {}", cfg.name, len(self.albums),
                    cfg.install_dir)
        return links
