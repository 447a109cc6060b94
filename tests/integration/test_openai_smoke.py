"""Smoke test for the chat-completion integration.

Requires OPENAI_API_KEY to be set in the environment.
Run with: pytest tests/integration/test_openai_smoke.py -v -s
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from frontmatter_describer.description.describer import OpenAIDescriber
from frontmatter_describer.orchestration.processor import DocumentProcessor

pytestmark = pytest.mark.skipif(
    "OPENAI_API_KEY" not in os.environ,
    reason="OPENAI_API_KEY not set",
)

_ARTICLE = (
    "# Caring for indoor cats\n\n"
    "Indoor cats live longer, but they need play, climbing space and a steady routine.\n"
    "This guide covers feeding schedules, litter box placement and enrichment toys.\n"
)


@pytest.fixture
def describer() -> OpenAIDescriber:
    return OpenAIDescriber(api_key=os.environ["OPENAI_API_KEY"])


class TestDescribe:
    def test_returns_nonempty_description(self, describer: OpenAIDescriber) -> None:
        description = describer.describe(_ARTICLE)

        print(f"\n  Description: {description}")
        assert isinstance(description, str)
        assert len(description) > 10


class TestProcess:
    def test_writes_single_line_description(
        self, describer: OpenAIDescriber, tmp_path: Path
    ) -> None:
        path = tmp_path / "cats.md"
        path.write_text("---\ntitle: Indoor cats\n---\n" + _ARTICLE, encoding="utf-8")

        outcome = DocumentProcessor(describer).process(path)

        assert outcome.updated, outcome.message
        header = path.read_text(encoding="utf-8").split("---\n")[1].splitlines()
        assert header[0] == "title: Indoor cats"
        assert header[1].startswith("description: ")
        assert len(header) == 2
