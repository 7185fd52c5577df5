from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtCore import QCoreApplication

from pylenient import __version__
from pylenient.di.container import Container
from pylenient.domain.errors import LenientError
from pylenient.host.qt_file import QtFile
from pylenient.lenient.file_proxy import get_mapped_file
from pylenient.utils.constants import APP_NAME, APP_ORG, LANGUAGE_JS, LANGUAGE_JSON

logger = logging.getLogger(__name__)


def language_for_path(path: Path) -> str:
    return LANGUAGE_JSON if path.suffix.lower() == ".json" else LANGUAGE_JS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pylenient",
        description="Convert a JS/JSON file between its canonical and lenient form.",
    )
    parser.add_argument("path", type=Path, help="file to convert")
    parser.add_argument(
        "--to",
        choices=("lenient", "canonical"),
        default="lenient",
        help="target dialect (default: lenient)",
    )
    parser.add_argument(
        "--language",
        choices=(LANGUAGE_JS, LANGUAGE_JSON),
        help="language of the file (default: guessed from the file suffix)",
    )
    parser.add_argument("--write", action="store_true", help="rewrite the file in place instead of printing")
    parser.add_argument("--config", type=Path, help="explicit config.ini")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _convert(args: argparse.Namespace, container: Container) -> str:
    language = args.language or language_for_path(args.path)
    converters = container.converters.get_converters(language)
    file = QtFile(args.path)
    mapped = get_mapped_file(
        file,
        converters,
        on_error=lambda e: logger.debug("Conversion of %s failed: %s", args.path, e),
    )

    if args.to == "lenient":
        # Canonical on disk -> lenient through the mapped read side.
        stream = mapped.create_read_stream()
        try:
            text = "".join(stream)
        finally:
            stream.close()
        if args.write:
            out = file.create_write_stream()
            out.write(text)
            out.end()
        return text

    # Lenient on disk -> canonical through the transactional write side.
    stream = file.create_read_stream()
    try:
        text = "".join(stream)
    finally:
        stream.close()
    if not args.write:
        return converters.to_canonical(text)
    # Converted once, inside the mapped write.
    out = mapped.create_write_stream()
    out.write(text)
    out.end()
    return ""


def run_app(argv: Sequence[str]) -> int:
    """
    Command-line front end over the same mapped-file adapters the editor uses.
    Returns the process exit status.
    """
    args = build_parser().parse_args(list(argv[1:]))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    QCoreApplication.setOrganizationName(APP_ORG)
    QCoreApplication.setApplicationName(APP_NAME)
    _app = QCoreApplication.instance() or QCoreApplication(list(argv))

    container = Container.default(explicit_ini=args.config)
    try:
        text = _convert(args, container)
    except (LenientError, OSError) as e:
        print(f"pylenient: {e}", file=sys.stderr)
        return 1

    if not args.write:
        sys.stdout.write(text)
    return 0
