"""Smoke tests — validate the command-line entry point end-to-end."""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from frontmatter_describer import __version__
from frontmatter_describer.cli import build_parser, main

_ENV = {"OPENAI_API_KEY": "sk-test"}


def test_version() -> None:
    assert __version__ == "0.1.0"


def test_parser_requires_root_dir(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args([])
    assert exc_info.value.code == 2
    assert "ROOT_DIR" in capsys.readouterr().err


def test_missing_root_dir_exits_non_zero() -> None:
    with patch.dict(os.environ, _ENV, clear=True), pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_missing_api_key_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch.dict(os.environ, {}, clear=True):
        code = main([str(tmp_path)])

    assert code == 1
    assert "OPENAI_API_KEY environment variable is not set" in capsys.readouterr().err


def test_unknown_provider_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch.dict(os.environ, {**_ENV, "FD_PROVIDER": "nope"}, clear=True):
        code = main([str(tmp_path)])

    assert code == 1
    assert "nope" in capsys.readouterr().err


def test_missing_directory_is_fatal(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch.dict(os.environ, _ENV, clear=True):
        code = main([str(tmp_path / "missing")])

    assert code == 1
    captured = capsys.readouterr()
    assert "Fatal error:" in captured.err
    assert "Process completed" not in captured.out


def test_empty_directory_completes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch.dict(os.environ, _ENV, clear=True):
        code = main([str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert "Process completed. 0 file(s) updated out of 0." in out


def test_full_run_updates_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "post.md"
    target.write_text("---\ntitle: Cats\n---\nAll about cats.\n", encoding="utf-8")
    (tmp_path / "done.md").write_text("---\ndescription: Done.\n---\n", encoding="utf-8")
    mock_describer = MagicMock()
    mock_describer.describe.return_value = "Great article about cats."

    with (
        patch.dict(os.environ, _ENV, clear=True),
        patch(
            "frontmatter_describer.cli.describer_from_config",
            return_value=mock_describer,
        ),
    ):
        code = main([str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert f"Updated: {target}" in out
    assert f"Skipped (description exists): {tmp_path / 'done.md'}" in out
    assert out.rstrip().endswith("Process completed. 1 file(s) updated out of 2.")
    assert target.read_text(encoding="utf-8") == (
        "---\ntitle: Cats\ndescription: Great article about cats.\n---\nAll about cats.\n"
    )


def test_suffix_option_overrides_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "a.md").write_text("A\n", encoding="utf-8")
    (tmp_path / "b.markdown").write_text("B\n", encoding="utf-8")
    mock_describer = MagicMock()
    mock_describer.describe.return_value = "B."

    with (
        patch.dict(os.environ, _ENV, clear=True),
        patch(
            "frontmatter_describer.cli.describer_from_config",
            return_value=mock_describer,
        ),
    ):
        code = main([str(tmp_path), "--suffix", ".markdown"])

    assert code == 0
    assert "1 file(s) updated out of 1." in capsys.readouterr().out
    assert (tmp_path / "a.md").read_text(encoding="utf-8") == "A\n"
