"""Command line entry point — run one sample by name.

This module is only the wiring layer between ``argparse`` and the
snippet registry; every sample lives in ``cloud_snippets.snippets``.

Examples::

    python -m cloud_snippets --list
    python -m cloud_snippets detect-faces-gcs gs://my-bucket/face.jpg
    python -m cloud_snippets delete-collection cities --batch-size 50
    python -m cloud_snippets return-info-from-transaction --population 999999
"""

from __future__ import annotations

import argparse
import logging
import sys

from cloud_snippets import __version__
from cloud_snippets.core.config import SnippetConfig
from cloud_snippets.core.exceptions import SnippetError
from cloud_snippets.snippets.registry import UnknownSnippetError, get_snippet, list_snippets

logger = logging.getLogger("cloud_snippets.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloud_snippets",
        description="Run a Cloud Vision or Cloud Firestore sample.",
    )
    parser.add_argument("snippet", nargs="?", help="snippet name (see --list)")
    parser.add_argument(
        "target",
        nargs="?",
        default="",
        help="image URI or path, collection name, or document name, depending on the snippet",
    )
    parser.add_argument("--list", action="store_true", help="list available snippets")
    parser.add_argument("--batch-size", type=int, default=None, help="delete-collection page size")
    parser.add_argument(
        "--population",
        type=int,
        default=None,
        help="initial population for return-info-from-transaction",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the selected snippet, and return an exit status."""
    parser = build_parser()
    options = parser.parse_args(argv)

    if options.list:
        for name in list_snippets():
            print(name)
        return 0

    if not options.snippet:
        parser.error("a snippet name is required (see --list)")
    if options.batch_size is not None and options.batch_size < 1:
        parser.error(f"--batch-size must be >= 1, got {options.batch_size}")

    try:
        config = SnippetConfig.from_env()
    except SnippetError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run = get_snippet(options.snippet)
    except UnknownSnippetError as exc:
        parser.error(str(exc))

    logger.info("Running snippet | name=%s", options.snippet)
    try:
        run(config, options)
    except SnippetError as exc:
        logger.error("Snippet failed | name=%s | error=%s", options.snippet, exc.to_error_dict())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
