"""Reading and writing records files."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def load_text(path: Path | str) -> str | None:
    """Return the full contents of a file, or None if it cannot be read."""
    path = Path(path)
    if not path.exists():
        logger.info("Records file not found: %s", path)
        return None
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read records file %s: %s", path, e)
        return None
    logger.info("Loaded %d characters from %s", len(text), path)
    return text


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def save_text(path: Path | str, text: str) -> None:
    """Write text to path, replacing any existing file.

    The text goes to a temporary file in the same directory first and is
    moved into place once fully written. An existing file keeps its
    permission bits; a new one gets the usual umask-based mode.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, tmp_name)
        else:
            os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Saved %d characters to %s", len(text), path)
