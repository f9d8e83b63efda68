"""Writing install files so an interrupted run never leaves a partial one.

Every output is skipped on later runs if it exists, so a truncated file
would be kept forever. Writers stage to a hidden temporary name beside the
target and rename it into place only once complete.
"""

import os
import shutil
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def staged(dst: Path):
    """Yield a temporary path next to dst, moved onto dst if the block succeeds."""
    dst = Path(dst)
    tmp = dst.with_name(f".{dst.name}.tmp")
    try:
        yield tmp
        os.replace(tmp, dst)
    finally:
        tmp.unlink(missing_ok=True)


def write_text(dst: Path, text: str) -> None:
    with staged(dst) as tmp:
        tmp.write_text(text, encoding="utf-8")


def copy_file(src: Path, dst: Path, keep_metadata: bool = False) -> None:
    """Copy src to dst, with timestamps and permissions too if keep_metadata."""
    with staged(dst) as tmp:
        if keep_metadata:
            shutil.copy2(src, tmp)
        else:
            shutil.copyfile(src, tmp)
