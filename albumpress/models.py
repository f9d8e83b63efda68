"""Records and configuration passed between the build steps."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .errors import ConfigError

SizeMode = Literal["pixels", "percent"]

DEFAULT_THUMB_SIZE = 200
DEFAULT_LARGE_SIZE = 1024
DEFAULT_PAGE_SIZE = 50
DEFAULT_WORKERS = 4


@dataclass
class ImageRecord:
    """One block of an album file, plus the paths filled in while building."""

    filename: str
    description: str = ""
    tags: list[str] = field(default_factory=list)

    # Set when the album loads the record
    source_path: Path | None = None
    thumbnail_size: int = 0
    large_size: int = 0

    # Set by the resize step, left as None when that variant failed
    thumbnail_path: Path | None = None
    thumbnail_filename: str | None = None
    large_path: Path | None = None
    large_filename: str | None = None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def __str__(self) -> str:
        return f"{self.filename} ({self.description!r}, tags={self.tags})"


@dataclass
class AlbumConfig:
    """Everything needed to build one album into one directory."""

    name: str
    album_file: Path
    image_dir: Path
    install_dir: Path
    tags: list[str] = field(default_factory=list)
    thumb_size: int = DEFAULT_THUMB_SIZE
    large_size: int = DEFAULT_LARGE_SIZE
    size_mode: SizeMode = "pixels"
    page_size: int = DEFAULT_PAGE_SIZE
    workers: int = DEFAULT_WORKERS
    include_originals: bool = True
    include_zip: bool = False
    force_images: bool = False
    force_html: bool = False
    force_zip: bool = False
    # Only set when the album is part of a gallery; enables the back-link
    gallery_name: str | None = None

    def validate(self) -> None:
        if self.size_mode not in ("pixels", "percent"):
            raise ConfigError(f"unknown size mode: {self.size_mode}")
        if self.page_size < 1:
            raise ConfigError(f"page size must be at least 1, got {self.page_size}")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        for label, size in (("thumbnail", self.thumb_size), ("large", self.large_size)):
            if size < 1:
                raise ConfigError(f"{label} size must be at least 1, got {size}")
            if self.size_mode == "percent" and size > 100:
                raise ConfigError(f"{label} percent must be in (0, 100], got {size}")


@dataclass
class GalleryConfig:
    """Shared settings for a multi-album build."""

    gallery_file: Path
    install_dir: Path
    name: str = "Gallery"
    thumb_size: int = DEFAULT_THUMB_SIZE
    large_size: int = DEFAULT_LARGE_SIZE
    size_mode: SizeMode = "pixels"
    page_size: int = DEFAULT_PAGE_SIZE
    workers: int = DEFAULT_WORKERS
    include_originals: bool = True
    include_zips: bool = False
    force_images: bool = False
    force_html: bool = False
    force_zip: bool = False
    seed: int | None = None


@dataclass
class AlbumEntry:
    """One album block from a gallery file."""

    name: str
    image_dir: Path
    subdir: str
    album_file: Path
    tags: list[str] = field(default_factory=list)
