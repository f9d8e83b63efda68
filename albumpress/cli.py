from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .album import Album
from .errors import AlbumPressError
from .gallery import Gallery
from .log import init_logging
from .metadata import make_album_file, make_album_files, merge_album_files
from .models import (
    DEFAULT_LARGE_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_THUMB_SIZE,
    DEFAULT_WORKERS,
    AlbumConfig,
    GalleryConfig,
)
from .tags import parse_tag_list

app = typer.Typer(help="albumpress - build a static photo gallery website")
console = Console(stderr=True)


def _check_size_mode(value: str) -> str:
    if value not in ("pixels", "percent"):
        raise typer.BadParameter("must be 'pixels' or 'percent'")
    return value


def _fail(e: Exception):
    console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file written or skipped"),
    log_file: Path = typer.Option(None, "--log-file", help="Also write the log to this file"),
):
    """Build static photo albums and galleries."""
    init_logging(verbose, str(log_file) if log_file else None)


@app.command("make-album")
def make_album(
    album_file: Path = typer.Option(..., "--album-file", help="File describing the images in the album"),
    image_dir: Path = typer.Option(..., "--image-dir", help="Directory with the original images"),
    install_dir: Path = typer.Option(..., "--install-dir", help="Directory to write HTML and images to"),
    title: str = typer.Option("Album", "--title", help="Album title, also names the zip file"),
    tags: str = typer.Option("", "--tags", help="Only include images with one of these comma separated tags"),
    thumb_size: int = typer.Option(DEFAULT_THUMB_SIZE, "--thumb-size", help="Thumbnail side (pixels or percent)"),
    large_size: int = typer.Option(DEFAULT_LARGE_SIZE, "--large-size", help="Longest side of the large image (pixels or percent)"),
    size_mode: str = typer.Option("pixels", "--size-mode", callback=_check_size_mode, help="'pixels' or legacy 'percent'"),
    page_size: int = typer.Option(DEFAULT_PAGE_SIZE, "--page-size", min=1, help="Thumbnails per album page"),
    workers: int = typer.Option(DEFAULT_WORKERS, "--workers", min=1, help="Parallel image resizers"),
    include_originals: bool = typer.Option(True, "--include-originals/--no-include-originals", help="Copy and link the original images"),
    include_zip: bool = typer.Option(False, "--include-zip", help="Offer a zip of the original images"),
    generate_images: bool = typer.Option(False, "--generate-images", help="Regenerate resized images even if present"),
    generate_html: bool = typer.Option(False, "--generate-html", help="Regenerate HTML even if present"),
    generate_zip: bool = typer.Option(False, "--generate-zip", help="Regenerate the zip even if present"),
):
    """Build a single album into INSTALL_DIR."""
    config = AlbumConfig(
        name=title,
        album_file=album_file,
        image_dir=image_dir,
        install_dir=install_dir,
        tags=parse_tag_list(tags),
        thumb_size=thumb_size,
        large_size=large_size,
        size_mode=size_mode,
        page_size=page_size,
        workers=workers,
        include_originals=include_originals,
        include_zip=include_zip,
        force_images=generate_images,
        force_html=generate_html,
        force_zip=generate_zip,
    )
    album = Album(config)
    try:
        album.install()
    except AlbumPressError as e:
        _fail(e)

    failed = len(album.report.failures) if album.report else 0
    console.print(f"[green]{title}: {len(album.chosen_images)} images installed to {install_dir}[/green]")
    if failed:
        console.print(f"[yellow]{failed} image(s) could not be resized, see warnings above.[/yellow]")


@app.command("make-gallery")
def make_gallery(
    gallery_file: Path = typer.Option(..., "--gallery-file", help="File describing the albums"),
    install_dir: Path = typer.Option(..., "--install-dir", help="Directory to write the gallery to"),
    title: str = typer.Option("Gallery", "--title", help="Gallery title"),
    thumb_size: int = typer.Option(DEFAULT_THUMB_SIZE, "--thumb-size", help="Thumbnail side (pixels or percent)"),
    large_size: int = typer.Option(DEFAULT_LARGE_SIZE, "--large-size", help="Longest side of the large image (pixels or percent)"),
    size_mode: str = typer.Option("pixels", "--size-mode", callback=_check_size_mode, help="'pixels' or legacy 'percent'"),
    page_size: int = typer.Option(DEFAULT_PAGE_SIZE, "--page-size", min=1, help="Thumbnails per album page"),
    workers: int = typer.Option(DEFAULT_WORKERS, "--workers", min=1, help="Parallel image resizers"),
    include_originals: bool = typer.Option(True, "--include-originals/--no-include-originals", help="Copy and link the original images"),
    include_zips: bool = typer.Option(False, "--include-zips", help="Offer a zip of each album's originals"),
    generate_images: bool = typer.Option(False, "--generate-images", help="Regenerate resized images even if present"),
    generate_html: bool = typer.Option(False, "--generate-html", help="Regenerate HTML even if present"),
    generate_zip: bool = typer.Option(False, "--generate-zip", help="Regenerate zips even if present"),
    seed: int = typer.Option(None, "--seed", help="Seed for picking each album's index thumbnail"),
):
    """Build every album listed in GALLERY_FILE plus a top level index."""
    config = GalleryConfig(
        gallery_file=gallery_file,
        install_dir=install_dir,
        name=title,
        thumb_size=thumb_size,
        large_size=large_size,
        size_mode=size_mode,
        page_size=page_size,
        workers=workers,
        include_originals=include_originals,
        include_zips=include_zips,
        force_images=generate_images,
        force_html=generate_html,
        force_zip=generate_zip,
        seed=seed,
    )
    gallery = Gallery(config)
    try:
        gallery.install()
    except AlbumPressError as e:
        _fail(e)
    console.print(f"[green]{title}: {len(gallery.albums)} albums installed to {install_dir}[/green]")


@app.command("add-images")
def add_images(
    album_file: Path = typer.Option(..., "--album-file", help="Existing album file"),
    new_album_file: Path = typer.Option(..., "--new-album-file", help="Album file with the new images"),
    output_file: Path = typer.Option(..., "--output-file", help="Where to write the merged album file"),
):
    """Merge new images into an album file, ordered by filename."""
    try:
        records = merge_album_files(album_file, new_album_file, output_file)
    except (AlbumPressError, OSError) as e:
        _fail(e)
    console.print(f"Wrote album file: {output_file} ({len(records)} images)")


@app.command("make-album-file")
def make_album_file_command(
    image_dir: Path = typer.Argument(..., help="Directory of images to list"),
    description: str = typer.Argument("", help="Initial description given to every image"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Write one album file in each subdirectory of IMAGE_DIR instead"),
):
    """Write IMAGE_DIR/images.txt listing every image in the directory."""
    try:
        if recursive:
            paths = make_album_files(image_dir, description)
        else:
            paths = [make_album_file(image_dir, description)]
    except OSError as e:
        _fail(e)
    for path in paths:
        console.print(f"Wrote {path}")
