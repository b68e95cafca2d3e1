import csv
import json
import logging
from pathlib import Path
from typing import List

from .models import PuzzleInfo
from . import config


def format_info(info: PuzzleInfo) -> str:
    """Human-readable summary of one scanned puzzle."""
    lines: List[str] = [
        f"File:          {info.path}",
        f"Title:         {info.title}",
        f"Author:        {info.author}",
        f"Comment:       {info.comment}",
        f"Pieces:        {info.piece_file_count} files, {info.declared_piece_count} declared",
        f"Image size:    {info.image_file_size} bytes",
        f"Puzzle size:   {info.puzzle_file_size} bytes",
    ]
    if info.warnings:
        lines.append(f"Warnings ({len(info.warnings)}):")
        lines.extend(f"  - {w}" for w in info.warnings)
    return "\n".join(lines)


def info_to_json(info: PuzzleInfo) -> str:
    return json.dumps(info.to_dict(), indent=2, ensure_ascii=False)


def append_csv_row(info: PuzzleInfo, csv_path: Path):
    """
    Appends one row describing `info` to a CSV catalog.
    The header is written when the catalog is new or empty.
    """
    csv_path = Path(csv_path)
    write_header = not csv_path.exists() or csv_path.stat().st_size == 0
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    row = info.to_dict()
    # Warnings share one cell, separated like the issues column of other reports
    row["warnings"] = ";".join(info.warnings)

    with csv_path.open("a", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=config.CSV_COLUMNS)
        if write_header:
            writer.writeheader()
        writer.writerow(row)

    logging.info(f"Appended {info.filename} to {csv_path}")
