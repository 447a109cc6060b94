"""Data models for documents with a YAML front-matter header."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

# Values produced by the YAML safe loader for a header entry
HeaderValue = str | int | float | bool | date | list[Any] | dict[str, Any] | None

# Front-matter fence line
FENCE = "---"

BOM = "\ufeff"


@dataclass
class HeaderSource:
    """Raw text of a header block as it was read from disk.

    Attributes:
        fenced: Whether the document had a header fence at all.
        bom: Whether the text started with a UTF-8 byte-order mark.
        newline: Line ending of the first line, reused for emitted lines.
        preamble: Lines before the first key (comments, blank lines).
        entries: Raw lines of each top-level entry, keyed by header key.
        values: Value each key had when the header was parsed.
    """

    fenced: bool = False
    bom: bool = False
    newline: str = "\n"
    preamble: str = ""
    entries: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)

    def original_text(self, key: str, value: Any) -> str | None:
        """Return the entry's raw text if ``value`` is unchanged since parsing."""
        if key not in self.entries or key not in self.values:
            return None
        original = self.values[key]
        # bool == int in Python; True must not round-trip as a raw "1"
        if type(original) is not type(value) or original != value:
            return None
        return self.entries[key]


@dataclass
class Document:
    """A text document split into its header mapping and body.

    Attributes:
        header: Ordered mapping of header keys to values.
        body: Everything after the closing fence, byte-for-byte.
        source: Raw header text, used to re-emit untouched entries verbatim.
    """

    header: dict[str, HeaderValue] = field(default_factory=dict)
    body: str = ""
    source: HeaderSource | None = None
