"""Produce the thumbnail and large variant of every chosen image, in parallel.

Work is best effort: a record whose name or pixels can't be handled is
logged and reported, and the rest of the album carries on. A derived file
that already exists is trusted unless `force` is set. The cache is keyed on
the derived filename only, so a replaced source image with the same name is
not picked up without forcing.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from .errors import AlbumPressError
from .imaging import ImageTransform, PillowTransform, large_filename, thumbnail_filename
from .models import ImageRecord


@dataclass
class ResizeOutcome:
    """What happened to one record."""

    image: ImageRecord
    generated: int = 0
    cached: int = 0
    errors: list[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class ResizeReport:
    outcomes: list[ResizeOutcome] = field(default_factory=list)

    @property
    def generated(self) -> int:
        return sum(o.generated for o in self.outcomes)

    @property
    def cached(self) -> int:
        return sum(o.cached for o in self.outcomes)

    @property
    def failures(self) -> list[ResizeOutcome]:
        return [o for o in self.outcomes if not o.ok]


def _materialize(make, src: Path, dst: Path, size: int, force: bool) -> bool:
    """Run `make` unless dst is already there. Returns True if it ran."""
    if dst.exists() and not force:
        logger.debug("Exists, skipping: {}", dst)
        return False
    logger.debug("Generating {}", dst)
    make(src, dst, size)
    return True


def make_images(image: ImageRecord, out_dir: Path, transform: ImageTransform,
                force: bool = False) -> ResizeOutcome:
    """Make both variants for one record and fill in its derived fields.

    Never raises for per-image problems; they end up in the outcome.
    """
    outcome = ResizeOutcome(image)

    try:
        names = [
            (thumbnail_filename(image.filename, image.thumbnail_size),
             image.thumbnail_size, transform.make_thumbnail, "thumbnail"),
            (large_filename(image.filename, image.large_size),
             image.large_size, transform.make_large, "large"),
        ]
    except AlbumPressError as e:
        logger.warning("Problem making images for {}: {}", image.filename, e)
        outcome.errors.append(e)
        return outcome

    for name, size, make, variant in names:
        dst = out_dir / name
        try:
            if _materialize(make, image.source_path, dst, size, force):
                outcome.generated += 1
            else:
                outcome.cached += 1
        except (AlbumPressError, OSError) as e:
            logger.warning("Problem making {} for {}: {}", variant, image.filename, e)
            outcome.errors.append(e)
            continue

        if variant == "thumbnail":
            image.thumbnail_path, image.thumbnail_filename = dst, name
        else:
            image.large_path, image.large_filename = dst, name

    return outcome


def generate_images(images: list[ImageRecord], out_dir: Path, workers: int,
                    force: bool = False, transform: ImageTransform | None = None) -> ResizeReport:
    """Resize `images` into out_dir using a pool of `workers` threads.

    Blocks until every record has been attempted. Always returns a report;
    individual failures are in `report.failures`.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    if transform is None:
        transform = PillowTransform()
    if not images:
        return ResizeReport()

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resize") as pool:
        outcomes = list(pool.map(
            lambda image: make_images(image, out_dir, transform, force), images))

    report = ResizeReport(outcomes)
    logger.info("Images: {} generated, {} already present, {} records failed",
                report.generated, report.cached, len(report.failures))
    return report
