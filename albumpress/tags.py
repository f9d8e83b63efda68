"""Pick the images an album build actually shows."""

from .models import ImageRecord


def parse_tag_list(text: str | None) -> list[str]:
    """Split a comma separated tag option, dropping empty pieces."""
    if not text:
        return []
    return [t.strip() for t in text.split(",") if t.strip()]


def choose_images(images: list[ImageRecord], wanted_tags: list[str]) -> list[ImageRecord]:
    """Keep images carrying at least one of `wanted_tags`, in their original order.

    No wanted tags means no filtering: `images` itself is returned.
    Matching is exact and case sensitive.
    """
    if not wanted_tags:
        return images

    wanted = set(wanted_tags)
    return [image for image in images if wanted.intersection(image.tags)]
