"""Parse and serialize YAML front-matter headers.

A header is a YAML mapping fenced by ``---`` lines at the very top of a
document. Parsing keeps the raw text of every top-level entry so that
serializing an unchanged header reproduces it exactly; only entries whose
value changed are re-dumped.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable
from typing import Any

import yaml

from frontmatter_describer.frontmatter.models import (
    BOM,
    FENCE,
    Document,
    HeaderSource,
    HeaderValue,
)

logger = logging.getLogger(__name__)

# Start of a top-level entry: unindented, not a comment or sequence item
_ENTRY_START = re.compile(r"^[^\s#\-][^\n]*?:(?:\s|$)")


class FrontMatterError(ValueError):
    """Raised when a document's header cannot be parsed."""


def parse(raw_text: str) -> Document:
    """Split a document into its header mapping and body.

    Text that does not open with a fence has no header: the result has an
    empty mapping and the whole text as body. A leading byte-order mark is
    kept aside in the source and is not part of the fence or the body.

    Args:
        raw_text: Full document text.

    Returns:
        Document with the parsed header, the body and the raw header source.

    Raises:
        FrontMatterError: If the fence is never closed, the header is not
            valid YAML, or it does not load to a mapping.
    """
    bom = raw_text.startswith(BOM)
    text = raw_text[len(BOM) :] if bom else raw_text
    lines = text.splitlines(keepends=True)
    newline = "\r\n" if lines and lines[0].endswith("\r\n") else "\n"
    if not lines or lines[0].rstrip() != FENCE:
        source = HeaderSource(fenced=False, bom=bom, newline=newline)
        return Document(header={}, body=text, source=source)

    for close in range(1, len(lines)):
        if lines[close].rstrip() == FENCE:
            break
    else:
        raise FrontMatterError("Header fence is not closed")

    header_text = "".join(lines[1:close])
    body = "".join(lines[close + 1 :])
    try:
        loaded = yaml.safe_load(header_text)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML header: {exc}") from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise FrontMatterError(f"Header must be a mapping, got {type(loaded).__name__}")

    source = HeaderSource(fenced=True, bom=bom, newline=newline)
    split = _split_entries(header_text, loaded)
    if split is None:
        logger.debug("[parse] header entries not splittable; keys will be re-dumped")
    else:
        source.preamble, source.entries = split
        source.values = copy.deepcopy(loaded)
    return Document(header=dict(loaded), body=body, source=source)


def serialize(
    body: str,
    header: dict[str, HeaderValue],
    *,
    force_inline: Iterable[str] = (),
    source: HeaderSource | None = None,
) -> str:
    """Render a header mapping and body back into document text.

    Args:
        body: Text placed after the closing fence, unchanged.
        header: Ordered header mapping; one entry per key in this order.
        force_inline: Keys whose string values are flattened onto a single
            ``key: value`` line instead of a folded or block scalar.
        source: Raw header text from ``parse``. Entries whose value is
            unchanged are copied from it verbatim; its byte-order mark and
            line ending are reused for the fences and re-dumped entries.

    Returns:
        The full document text.
    """
    bom = BOM if source is not None and source.bom else ""
    if not header and not (source is not None and source.fenced):
        return bom + body

    newline = source.newline if source is not None else "\n"
    inline = set(force_inline)
    parts = [bom, FENCE, newline]
    if source is not None:
        parts.append(source.preamble)
    for key, value in header.items():
        if key in inline and isinstance(value, str):
            parts.append(_with_newline(_dump_inline(key, value), newline))
            continue
        original = source.original_text(key, value) if source is not None else None
        if original is None:
            original = _with_newline(_dump_entry(key, value), newline)
        parts.append(original)
    parts.extend([FENCE, newline, body])
    return "".join(parts)


def render(document: Document, *, force_inline: Iterable[str] = ()) -> str:
    """Serialize a parsed Document using its own header source."""
    return serialize(
        document.body,
        document.header,
        force_inline=force_inline,
        source=document.source,
    )


def flatten(text: str) -> str:
    """Trim every line and collapse all whitespace runs to single spaces."""
    return " ".join(text.split())


def _with_newline(dumped: str, newline: str) -> str:
    return dumped if newline == "\n" else dumped.replace("\n", newline)


def _dump_entry(key: Any, value: Any) -> str:
    return yaml.safe_dump(
        {key: value},
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )


def _dump_inline(key: Any, value: str) -> str:
    # Infinite width stops the emitter from folding long scalars
    return yaml.safe_dump(
        {key: flatten(value)},
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    )


def _split_entries(
    header_text: str, loaded: dict[Any, Any]
) -> tuple[str, dict[Any, str]] | None:
    """Cut the raw header into one text chunk per top-level key.

    Returns None when the chunks do not line up one-to-one with the loaded
    keys (flow mappings, duplicate keys, complex keys).
    """
    preamble: list[str] = []
    chunks: list[list[str]] = []
    for line in header_text.splitlines(keepends=True):
        if _ENTRY_START.match(line):
            chunks.append([line])
        elif chunks:
            chunks[-1].append(line)
        else:
            preamble.append(line)

    entries: dict[Any, str] = {}
    for chunk in chunks:
        raw = "".join(chunk)
        try:
            single = yaml.safe_load(raw)
        except yaml.YAMLError:
            return None
        if not isinstance(single, dict) or len(single) != 1:
            return None
        (key,) = single
        if key not in loaded or key in entries:
            return None
        entries[key] = raw

    if list(entries) != list(loaded):
        return None
    return "".join(preamble), entries
