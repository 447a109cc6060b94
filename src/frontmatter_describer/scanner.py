"""Recursive file discovery for the documents to process."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".md"


def iter_files(root_dir: str | os.PathLike[str], suffix: str = DEFAULT_SUFFIX) -> Iterator[Path]:
    """Yield files under ``root_dir`` whose name ends with ``suffix``.

    Traversal is depth-first in the order the filesystem lists entries.
    Directories, symlinked ones included, are always descended; there is
    no protection against symlink cycles.

    Args:
        root_dir: Directory to walk.
        suffix: File name suffix to match (e.g. ".md").

    Yields:
        Paths of matching files.

    Raises:
        OSError: If ``root_dir`` (or a directory below it) cannot be listed.
    """
    with os.scandir(root_dir) as entries:
        listed = list(entries)
    for entry in listed:
        path = Path(entry.path)
        if entry.is_dir():
            yield from iter_files(path, suffix)
        elif entry.is_file() and entry.name.endswith(suffix):
            yield path


def scan(root_dir: str | os.PathLike[str], suffix: str = DEFAULT_SUFFIX) -> list[Path]:
    """Return every matching file under ``root_dir``; empty if there are none."""
    files = list(iter_files(root_dir, suffix))
    logger.info("[scan] scan complete; root:%s;suffix:%s;file_count:%d", root_dir, suffix, len(files))
    return files
