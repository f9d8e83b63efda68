"""Read and write album files.

An album file describes images in blocks separated by blank lines:

    IMG_0001.jpg
    Optional one line description
    Tag: optional, comma, separated, tags
    Tag: more tags

    IMG_0002.jpg

Lines starting with '#' are comments and may appear anywhere. Only the
filename, description and tags are parsed here; the album fills in paths and
sizes so this module stays usable for plain album file tooling.
"""

from pathlib import Path

from loguru import logger

from . import files
from .errors import MalformedMetadata
from .models import ImageRecord

TAG_PREFIX = "Tag: "
ALBUM_FILENAME = "images.txt"

# Never listed when scaffolding an album file
SKIPPED_EXTENSIONS = {".mov", ".mp4", ".heic"}


def _is_tag_line(line: str) -> bool:
    return line.startswith(TAG_PREFIX) or line == TAG_PREFIX.rstrip()


def _split_tags(line: str) -> list[str]:
    pieces = line[len(TAG_PREFIX):].split(",")
    return [p.strip() for p in pieces if p.strip()]


def parse_album_file(path: Path | str) -> list[ImageRecord]:
    """Parse an album file into records, in file order.

    Raises OSError if the file can't be read and MalformedMetadata for a line
    that doesn't fit where it appears.
    """
    path = Path(path)
    records: list[ImageRecord] = []

    filename: str | None = None
    description: str | None = None
    tags: list[str] = []

    def flush():
        records.append(ImageRecord(
            filename=filename,
            description=description or "",
            tags=tags,
        ))

    try:
        with path.open(encoding="utf-8") as f:
            for lineno, raw in enumerate(f, start=1):
                line = raw.strip()

                if line.startswith("#"):
                    continue

                # A blank line ends a block. Extra blank lines are harmless.
                if not line:
                    if filename is not None:
                        flush()
                        filename, description, tags = None, None, []
                    continue

                if filename is None:
                    if _is_tag_line(line):
                        raise MalformedMetadata(path, lineno, line, "expected a filename")
                    filename = line
                    continue

                if _is_tag_line(line):
                    tags.extend(_split_tags(line))
                    continue

                # The description may only come straight after the filename
                if description is None and not tags:
                    description = line
                    continue

                raise MalformedMetadata(path, lineno, line, "unexpected line")
    except UnicodeDecodeError as e:
        raise MalformedMetadata(path, 0, "", f"not valid UTF-8 ({e.reason})") from e

    if filename is not None:
        flush()

    logger.debug("Parsed {} images from {}", len(records), path)
    return records


def format_album_file(records: list[ImageRecord]) -> str:
    blocks = []
    for record in records:
        lines = [record.filename]
        if record.description:
            lines.append(record.description)
        if record.tags:
            lines.append(TAG_PREFIX + ", ".join(record.tags))
        blocks.append("\n".join(lines) + "\n\n")
    return "".join(blocks)


def write_album_file(path: Path | str, records: list[ImageRecord]) -> None:
    """Write records back out in the format parse_album_file reads."""
    files.write_text(Path(path), format_album_file(records))


def merge_album_files(original: Path | str, new: Path | str, output: Path | str) -> list[ImageRecord]:
    """Merge the images of two album files, ordered by filename.

    This only gives a sensible order when filenames sort chronologically
    (IMG_20170213..., IMG_20170214...).
    """
    records = parse_album_file(original) + parse_album_file(new)
    records.sort(key=lambda r: r.filename)
    write_album_file(output, records)
    logger.info("Wrote album file {} ({} images)", output, len(records))
    return records


def make_album_file(image_dir: Path | str, description: str = "",
                    output: Path | str | None = None) -> Path:
    """List every image in image_dir into a new album file.

    Each image gets `description`, which may be blank. The file goes to
    image_dir/images.txt unless `output` says otherwise.
    """
    image_dir = Path(image_dir)
    output = Path(output) if output else image_dir / ALBUM_FILENAME

    filenames = sorted(
        p.name for p in image_dir.iterdir()
        if p.is_file()
        and p.name not in (ALBUM_FILENAME, output.name)
        and p.suffix.lower() not in SKIPPED_EXTENSIONS
    )
    records = [ImageRecord(filename=name, description=description.strip())
               for name in filenames]
    write_album_file(output, records)
    logger.info("Wrote {} ({} images)", output, len(records))
    return output


def make_album_files(root: Path | str, description: str = "") -> list[Path]:
    """Run make_album_file on each immediate subdirectory of root, in name order.

    Hidden directories are left alone. Returns the album files written.
    """
    root = Path(root)
    written = []
    for sub in sorted(p for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")):
        written.append(make_album_file(sub, description))
    logger.info("Wrote {} album files under {}", len(written), root)
    return written
