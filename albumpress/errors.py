"""Exceptions raised while building albums and galleries."""

from pathlib import Path


class AlbumPressError(Exception):
    """Base class for everything albumpress raises on purpose."""


class _LineError(AlbumPressError):
    def __init__(self, path: Path | str, line_number: int, line: str, reason: str):
        self.path = Path(path)
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason}: {line!r}")


class MalformedMetadata(_LineError):
    """An album file does not follow the filename/description/Tag grammar."""


class MalformedGalleryFile(_LineError):
    """A gallery file has a bad line or an incomplete album block."""


class InvalidFilename(AlbumPressError):
    """A filename cannot be split into exactly one basename and extension."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"unexpected filename format (need exactly one '.'): {filename}"
        )


class TransformFailure(AlbumPressError):
    """Pillow could not produce a derived image from a source image."""

    def __init__(self, source: Path, reason: str):
        self.source = Path(source)
        self.reason = reason
        super().__init__(f"unable to transform {self.source}: {reason}")


class ConfigError(AlbumPressError):
    """Album or gallery configuration is unusable."""


class InstallError(AlbumPressError):
    """A fail-fast step of an album or gallery install went wrong.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, phase: str, name: str, reason: str):
        self.phase = phase
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {phase}: {reason}")
