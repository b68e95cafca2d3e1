import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .exceptions import PuzzleScanError
from .reporting import append_csv_row, format_info, info_to_json
from .scanning.archive import scan_puzzle

def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to stderr and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Show the details of a Palapeli .puzzle file")

    p.add_argument("puzzle", type=Path, help=".puzzle file to scan")

    p.add_argument("--json", action="store_true", help="Print the details as JSON")
    p.add_argument("--csv", type=Path, default=None, help="Append a row for the puzzle to this CSV catalog")
    p.add_argument("--strict", action="store_true", help="Exit with status 2 if the scan produced warnings")
    p.add_argument("--progress", action="store_true", help="Show a progress bar while reading")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")

    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        info = scan_puzzle(str(args.puzzle), progress=args.progress)
    except PuzzleScanError as e:
        logging.error(str(e))
        sys.exit(1)

    if args.json:
        print(info_to_json(info))
    else:
        print(format_info(info))

    if args.csv:
        append_csv_row(info, args.csv)

    for w in info.warnings:
        logging.warning(f"{info.filename}: {w}")

    if args.strict and info.warnings:
        sys.exit(2)

if __name__ == "__main__":
    main()
