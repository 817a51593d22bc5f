"""Command-line entry point: fetch replays from the archive and print them.

Usage:
    prismreplay ib0Qt-pp8PL VyrET-IGxyL
    prismreplay --file replay.json.gz --dump
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from prismreplay.archive import ReplayArchive, load_file
from prismreplay.dump import dump_replay, format_summary
from prismreplay.errors import ReplayError
from prismreplay.settings import SAMPLE_CODES, get_settings

LOG_DIR = Path.home() / ".prismreplay"
LOG_FILE = LOG_DIR / "debug.log"

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False, log_file: Optional[Path] = LOG_FILE) -> None:
    """Send DEBUG records to the log file and INFO (or DEBUG) to the console."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Remove any existing handlers to avoid duplicates
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: cannot write debug log {log_file}: {e}", file=sys.stderr)

    level_name = str(get_settings().get("log_level")).upper()
    # getLevelName returns the number for known names, a string otherwise
    console_level = logging.getLevelName(level_name)
    if not isinstance(console_level, int):
        console_level = logging.INFO
    if verbose:
        console_level = logging.DEBUG

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s | %(message)s'))
    root_logger.addHandler(console_handler)

    if logging.getLevelName(level_name) != console_level and not verbose:
        logger.warning(f"Unknown log_level {level_name!r} in settings, using INFO")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prismreplay",
        description="Fetch and decode Prismata match replays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  prismreplay {SAMPLE_CODES[0]}
  prismreplay {SAMPLE_CODES[1]} --dump
  prismreplay --file saved/replay.json.gz

Environment variables:
  PRISMREPLAY_ARCHIVE_URL  Override the archive root
  PRISMREPLAY_TIMEOUT      Override the request timeout (seconds)

Debug logs are written to {LOG_FILE}
        """
    )
    parser.add_argument(
        "codes",
        nargs="*",
        help=f"Replay codes to fetch (default: {SAMPLE_CODES[0]})"
    )
    parser.add_argument(
        "--file", "-f",
        dest="files",
        action="append",
        type=Path,
        default=[],
        help="Decode a local .json or .json.gz replay instead of fetching (repeatable)"
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the full decoded structure instead of a summary"
    )
    parser.add_argument(
        "--archive-url",
        help="Archive root URL (overrides settings)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (overrides settings)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug output on the console"
    )
    parser.add_argument(
        "--show-log",
        action="store_true",
        help="Show the debug log file path and exit"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the prismreplay command."""
    args = build_parser().parse_args(argv)

    if args.show_log:
        print(f"Debug log: {LOG_FILE}")
        return 0

    configure_logging(verbose=args.verbose)

    codes = args.codes
    if not codes and not args.files:
        codes = [SAMPLE_CODES[0]]

    archive = ReplayArchive(base_url=args.archive_url, timeout=args.timeout) if codes else None
    render = dump_replay if args.dump else format_summary

    sources = [(str(path), lambda p=path: load_file(p)) for path in args.files]
    sources += [(code, lambda c=code: archive.load(c)) for code in codes]

    failures = 0
    for name, load in sources:
        try:
            replay = load()
        except ReplayError as e:
            logger.error(f"{name}: {e}")
            failures += 1
            continue
        print(render(replay))
        print()

    if failures:
        logger.error(f"{failures} of {len(sources)} replays failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
