"""Split an album's images over index.html, page-2.html, page-3.html, ..."""

import math
from dataclasses import dataclass

from .models import ImageRecord


def page_filename(number: int) -> str:
    """Page 1 is index.html, the rest are page-N.html."""
    return "index.html" if number == 1 else f"page-{number}.html"


@dataclass
class Page:
    number: int
    total_pages: int
    images: list[ImageRecord]
    # Flat index (into the chosen images) of this page's first image
    start: int = 0

    @property
    def filename(self) -> str:
        return page_filename(self.number)

    @property
    def previous_url(self) -> str | None:
        if self.number == 1:
            return None
        return page_filename(self.number - 1)

    @property
    def next_url(self) -> str | None:
        if self.number >= self.total_pages:
            return None
        return page_filename(self.number + 1)


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size)


def page_number_for(index: int, page_size: int) -> int:
    """Which page the image at flat `index` lands on."""
    return index // page_size + 1


def paginate(images: list[ImageRecord], page_size: int) -> list[Page]:
    """Pages of at most `page_size` images, in order. No images, no pages.

    page_size must be at least 1; AlbumConfig.validate checks that.
    """
    total = total_pages(len(images), page_size)
    return [
        Page(
            number=k,
            total_pages=total,
            images=images[(k - 1) * page_size:k * page_size],
            start=(k - 1) * page_size,
        )
        for k in range(1, total + 1)
    ]
