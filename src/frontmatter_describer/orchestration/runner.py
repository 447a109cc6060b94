"""Run driver — scans a directory and processes every document in sequence."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from frontmatter_describer.scanner import DEFAULT_SUFFIX, scan

if TYPE_CHECKING:
    from frontmatter_describer.orchestration.processor import DocumentProcessor

logger = logging.getLogger(__name__)

NO_FILES_MESSAGE = "No matching files found."


@dataclass
class RunSummary:
    """Counters and report lines for one run."""

    total_files: int = 0
    updated_files: int = 0
    log_lines: list[str] = field(default_factory=list)

    def completion_line(self) -> str:
        return (
            f"Process completed. {self.updated_files} file(s) updated "
            f"out of {self.total_files}."
        )


def run_directory(
    root_dir: str | os.PathLike[str],
    processor: DocumentProcessor,
    suffix: str = DEFAULT_SUFFIX,
    report: Callable[[str], None] = print,
) -> RunSummary:
    """Process every matching file under ``root_dir``, one at a time.

    Files are handled strictly in scan order so that requests to the
    generation service are never concurrent and the report order is stable.

    Args:
        root_dir: Directory to scan.
        processor: DocumentProcessor applied to each file.
        suffix: File name suffix to match.
        report: Receives each per-file message as it is produced.

    Returns:
        RunSummary with totals and every per-file message.

    Raises:
        OSError: If the directory scan fails; per-file failures never raise.
    """
    files = scan(root_dir, suffix)
    summary = RunSummary(total_files=len(files))
    if not files:
        report(NO_FILES_MESSAGE)
        summary.log_lines.append(NO_FILES_MESSAGE)
        return summary

    for path in files:
        outcome = processor.process(path)
        report(outcome.message)
        summary.log_lines.append(outcome.message)
        if outcome.updated:
            summary.updated_files += 1

    logger.info(
        "[run_directory] run complete; total:%d;updated:%d",
        summary.total_files,
        summary.updated_files,
    )
    return summary
