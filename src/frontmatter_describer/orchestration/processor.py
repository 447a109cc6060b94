"""Document processor — fills in a missing description for one file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from frontmatter_describer.frontmatter.codec import flatten, parse, render

if TYPE_CHECKING:
    from frontmatter_describer.description.describer import Describer

logger = logging.getLogger(__name__)

DESCRIPTION_KEY = "description"


@dataclass
class ProcessOutcome:
    """Result of processing a single document.

    Attributes:
        path: File that was processed.
        updated: True only if the file was rewritten.
        message: One-line report (Updated / Skipped / Failed).
    """

    path: Path
    updated: bool
    message: str


def normalize_description(text: str) -> str:
    """Collapse line breaks and whitespace runs into single spaces, then trim."""
    return flatten(text)


def has_description(value: Any) -> bool:
    """Return True if a header value counts as an existing description.

    Missing, null, and blank strings do not count.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


class DocumentProcessor:
    """Reads a document, generates a description if it lacks one, and writes it back."""

    def __init__(
        self,
        describer: Describer,
        force_inline_keys: Iterable[str] = (DESCRIPTION_KEY,),
    ) -> None:
        """Initialise the processor.

        Args:
            describer: Generates description text from a document body.
            force_inline_keys: Header keys always written as a single line.
        """
        self._describer = describer
        self._force_inline_keys = tuple(force_inline_keys)

    def process(self, path: Path) -> ProcessOutcome:
        """Process one file; every failure is reported in the outcome, never raised.

        The file is only written once the complete new text has been built.

        Args:
            path: Document to process.

        Returns:
            ProcessOutcome describing what happened.
        """
        try:
            return self._process(path)
        except Exception as exc:
            logger.warning("[process] file failed; path:%s;error:%s", path, exc)
            return ProcessOutcome(path=path, updated=False, message=f"Failed: {path} - {exc}")

    def _process(self, path: Path) -> ProcessOutcome:
        # newline="" keeps CRLF bodies byte-for-byte through the rewrite
        with path.open(encoding="utf-8", newline="") as handle:
            raw = handle.read()
        document = parse(raw)

        if has_description(document.header.get(DESCRIPTION_KEY)):
            logger.info("[process] description exists; path:%s", path)
            return ProcessOutcome(
                path=path,
                updated=False,
                message=f"Skipped (description exists): {path}",
            )

        generated = self._describer.describe(document.body)
        document.header[DESCRIPTION_KEY] = normalize_description(generated)
        new_raw = render(document, force_inline=self._force_inline_keys)

        path.write_text(new_raw, encoding="utf-8", newline="")
        logger.info("[process] description written; path:%s", path)
        return ProcessOutcome(path=path, updated=True, message=f"Updated: {path}")
