"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from frontmatter_describer import __version__
from frontmatter_describer.config import load_config
from frontmatter_describer.description.describer import describer_from_config
from frontmatter_describer.orchestration.processor import DocumentProcessor
from frontmatter_describer.orchestration.runner import run_directory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontmatter-describer",
        description=(
            "Generate an SEO description for every document under ROOT_DIR "
            "whose front matter has none."
        ),
        epilog="Example: OPENAI_API_KEY=xxx frontmatter-describer ./content",
    )
    parser.add_argument("root_dir", metavar="ROOT_DIR", help="directory to scan")
    parser.add_argument(
        "--suffix",
        default=None,
        help="file name suffix to process (default: FD_FILE_SUFFIX or .md)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the tool and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config = load_config()
    except KeyError as exc:
        print(
            f"Error: {exc.args[0]} environment variable is not set. "
            "Set it in your shell or prefix the command with it.",
            file=sys.stderr,
        )
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "[main] starting run; root:%s;provider:%s;model:%s",
        args.root_dir,
        config.provider,
        config.model,
    )
    processor = DocumentProcessor(describer_from_config(config))
    try:
        summary = run_directory(args.root_dir, processor, suffix=args.suffix or config.file_suffix)
    except Exception as exc:
        logger.error("[main] run aborted", exc_info=True)
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    print(f"\n{summary.completion_line()}")
    return 0
