"""gluegen command line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List

from .config import GlueConfig
from .export import to_glue_source
from .translate import GlueError, translate

LOG = logging.getLogger("gluegen.cli")

DEFAULT_LOCATED_VARS = "LOCATED_VARIABLES.h"
DEFAULT_GLUE_VARS = "glueVars.cpp"

EXIT_OK = 0
EXIT_INPUT_OPEN = 1
EXIT_OUTPUT_OPEN = 2
EXIT_GENERATION = 3
EXIT_USAGE = 4


class _ArgumentParser(argparse.ArgumentParser):
    # Exit status 2 belongs to EXIT_OUTPUT_OPEN
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="gluegen",
        description=(
            "Reads the LOCATED_VARIABLES.h file generated by the MATIEC compiler "
            "and produces glueVars.cpp for the runtime. If not given, paths are "
            "relative to the current directory."
        ),
    )
    parser.add_argument(
        "located_vars",
        nargs="?",
        help=f"Path to the located variables file (default {DEFAULT_LOCATED_VARS})",
    )
    parser.add_argument(
        "glue_vars",
        nargs="?",
        help=f"Path to the generated glue file (default {DEFAULT_GLUE_VARS})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed declarations and invalid addressing",
    )
    parser.add_argument(
        "--no-checksum",
        action="store_true",
        help="Omit the MD5 checksum block from the output",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("GLUEGEN_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if (args.located_vars is None) != (args.glue_vars is None):
        parser.error("give both the located variables and glue paths, or neither")

    input_path = args.located_vars or DEFAULT_LOCATED_VARS
    output_path = args.glue_vars or DEFAULT_GLUE_VARS
    config = GlueConfig(strict=args.strict, emit_checksum=not args.no_checksum)

    try:
        src = open(input_path, encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as exc:
        LOG.error("Error opening located variables file at %s: %s", input_path, exc)
        return EXIT_INPUT_OPEN

    with src:
        try:
            dst = open(output_path, "w", encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            LOG.error("Error opening glue variables file at %s: %s", output_path, exc)
            return EXIT_OUTPUT_OPEN

        with dst:
            try:
                module = translate(src, config)
            except GlueError as exc:
                LOG.error("%s", exc)
                return EXIT_GENERATION
            dst.write(to_glue_source(module, config))

    LOG.info("Wrote %s (%d glue entries)", output_path, module.table_size)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
