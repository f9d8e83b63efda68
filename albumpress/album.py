"""Build one album: parse, choose, resize, paginate, render, install."""

import random

from loguru import logger

from . import archive, render
from .errors import AlbumPressError, InstallError
from .files import copy_file
from .imaging import ImageTransform, PillowTransform
from .metadata import parse_album_file
from .models import AlbumConfig, ImageRecord
from .pagination import paginate
from .resize import ResizeReport, generate_images
from .tags import choose_images


class Album:
    """One album file turned into one directory of HTML and images.

    `images` holds every record in the album file, `chosen_images` the ones
    that passed the tag filter, in the same relative order.
    """

    def __init__(self, config: AlbumConfig, transform: ImageTransform | None = None):
        self.config = config
        self.transform = transform or PillowTransform(config.size_mode)
        self.images: list[ImageRecord] = []
        self.chosen_images: list[ImageRecord] = []
        self.report: ResizeReport | None = None

    @property
    def name(self) -> str:
        return self.config.name

    def install(self) -> None:
        """Run every step in order. The first failure stops the album.

        Per-image resize problems are not failures; they are logged and the
        affected pages get placeholders.
        """
        steps = [
            ("checking configuration", self.config.validate),
            ("parsing album file", self.load),
            ("choosing images", self.choose_images),
            ("generating images", self.generate_images),
            ("generating HTML", self.generate_html),
        ]
        if self.config.include_originals:
            steps.append(("installing original images", self.install_originals))
        if self.config.include_zip:
            steps.append(("creating zip file", self.make_zip))

        for phase, step in steps:
            logger.info("{}: {}...", self.name, phase)
            try:
                step()
            except (AlbumPressError, OSError) as e:
                raise InstallError(phase, self.name, str(e)) from e

    def load(self) -> None:
        """Parse the album file and fill in each record's path and sizes."""
        images = parse_album_file(self.config.album_file)
        for image in images:
            image.source_path = self.config.image_dir / image.filename
            image.thumbnail_size = self.config.thumb_size
            image.large_size = self.config.large_size
        self.images = images

    def choose_images(self) -> None:
        self.chosen_images = choose_images(self.images, self.config.tags)
        logger.info("{}: chose {} of {} images", self.name,
                    len(self.chosen_images), len(self.images))

    def generate_images(self) -> ResizeReport:
        self.report = generate_images(
            self.chosen_images,
            self.config.install_dir,
            self.config.workers,
            force=self.config.force_images,
            transform=self.transform,
        )
        for outcome in self.report.failures:
            logger.warning("{}: {} will be shown without some of its images",
                           self.name, outcome.image.filename)
        return self.report

    def generate_html(self) -> int:
        """Write the album pages and image pages. Returns the page count."""
        cfg = self.config
        cfg.install_dir.mkdir(parents=True, exist_ok=True)
        render.write_stylesheet(cfg.install_dir, force=cfg.force_html)

        zip_name = archive.zip_filename(self.name) if cfg.include_zip else None
        pages = paginate(self.chosen_images, cfg.page_size)
        for page in pages:
            for i in range(page.start, page.start + len(page.images)):
                render.write_image_page(
                    self.chosen_images, i, cfg.install_dir,
                    title=self.name,
                    page_size=cfg.page_size,
                    gallery_name=cfg.gallery_name,
                    include_originals=cfg.include_originals,
                    force=cfg.force_html,
                )
            render.write_album_page(
                page, cfg.install_dir,
                title=self.name,
                image_count=len(self.chosen_images),
                gallery_name=cfg.gallery_name,
                zip_filename=zip_name,
                force=cfg.force_html,
            )

        logger.info("{}: {} pages, {} image pages", self.name, len(pages),
                    len(self.chosen_images))
        return len(pages)

    def install_originals(self) -> None:
        """Copy chosen originals next to the HTML, skipping ones already there."""
        for image in self.chosen_images:
            target = self.config.install_dir / image.filename
            if target.exists():
                continue
            copy_file(image.source_path, target, keep_metadata=True)
            logger.debug("Copied {} -> {}", image.source_path, target)

    def make_zip(self) -> bool:
        zip_path = self.config.install_dir / archive.zip_filename(self.name)
        return archive.make_zip(zip_path, self.chosen_images, force=self.config.force_zip)

    def representative(self, rng: random.Random | None = None) -> ImageRecord | None:
        """Any one chosen image, picked at random, to stand for the album."""
        if not self.chosen_images:
            return None
        return (rng or random).choice(self.chosen_images)
