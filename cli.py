"""Command-line entry points.

    extract-symbols      -> flat symbol list (functions, types, enums)
    extract-symbols-raw  -> passthrough document (functions, types, enum_options)
"""

import argparse
import logging
import sys
from typing import List, Optional

from datamodels import Projection
from exceptions import PortNotFound
from extractor_utils import get_normalizer, run_extraction
from logger import logger, set_log_level
from settings import ExtractorSettings


def build_parser(projection: Projection, settings: ExtractorSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Extract function, type and enum documentation from a running "
            f"engine instance ({projection.value} projection)."
        ),
    )
    parser.add_argument("--port", "-p", type=int, default=settings.port,
                        help="Engine port (default: auto-detect from the running process)")
    parser.add_argument("--output", "-o", default=settings.output,
                        help=f"Output JSON file (default: {settings.output})")
    parser.add_argument("--host", default=settings.host,
                        help=f"Engine host (default: {settings.host})")
    parser.add_argument("--process-name", default=settings.process_name,
                        help=f"Engine executable used for port detection (default: {settings.process_name})")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug output")
    return parser


def run(projection: Projection, argv: Optional[List[str]] = None) -> int:
    args = build_parser(projection, ExtractorSettings()).parse_args(argv)
    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        run_extraction(
            get_normalizer(projection),
            port=args.port,
            output_path=args.output,
            host=args.host,
            process_name=args.process_name,
        )
    except PortNotFound as e:
        logger.error(f"{e}. Start the engine or pass --port.")
        return 1
    return 0


def main_standard():
    sys.exit(run(Projection.STANDARD))


def main_raw():
    sys.exit(run(Projection.RAW))


if __name__ == "__main__":
    main_standard()
