#!/usr/bin/env python3
"""
hashcp command-line interface.

Usage: hashcp [-v] [-t ALGORITHM] [-b BUFFER_SIZE] SOURCE [SOURCE ...] DESTINATION

Exit code is 0 when the run completes, even if some files failed
verification; their names are printed one per line on stderr.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from .config import BUFFER_SIZE, DEFAULT_HASH_ALGORITHM, HASH_ALGORITHMS, CopyConfig
from .errors import AmbiguousDestinationError, ThreadJoinError
from .verifier import CopyVerifier

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Parameters
    ----------
    verbose : bool
        Enable verbose logging
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Parameters
    ----------
    argv : Sequence[str] | None, default=None
        Arguments to parse (defaults to sys.argv[1:])

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog="hashcp",
        description="Copy files and verify the copies by content hash",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s a.txt b.txt outdir/              # Copy two files into a directory
  %(prog)s -v 'clips/*.mov' /mnt/backup/     # Glob pattern, with timing checkpoints
  %(prog)s -t sha256 report.pdf copy.pdf     # Single file to a new name
        """,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable timing checkpoints and debug output"
    )

    parser.add_argument(
        "-t",
        "--hash",
        type=str,
        default=DEFAULT_HASH_ALGORITHM,
        choices=HASH_ALGORITHMS,
        help=f"Hash algorithm for verification (default: {DEFAULT_HASH_ALGORITHM})",
    )

    parser.add_argument(
        "-b",
        "--buffer-size",
        type=int,
        default=BUFFER_SIZE,
        help="Buffer size in bytes (default: 8MB)",
    )

    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=None,
        help="Hashing threads (default: number of CPUs)",
    )

    parser.add_argument(
        "sources",
        nargs="+",
        help="Source files, directories or glob patterns",
    )

    parser.add_argument(
        "destination",
        type=str,
        help="Destination directory, or file path for a single source",
    )

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point.

    Returns
    -------
    int
        Exit code: 0 on completion (mismatches included), 1 for failure,
        130 for keyboard interrupt
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        config = CopyConfig.from_args(args)

        verifier = CopyVerifier(args.sources, args.destination, config)
        report = asyncio.run(verifier.run())

    except KeyboardInterrupt:
        logger.error("Operation interrupted by user")
        return 130
    except AmbiguousDestinationError as e:
        logger.error(f"{e}")
        return 1
    except ThreadJoinError as e:
        logger.error(f"{e}: {e.__cause__}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid parameter: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

    for name in report.mismatches:
        print(name, file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
