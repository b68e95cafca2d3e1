import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

@dataclass
class PuzzleInfo:
    """
    The interesting details of a .puzzle file, filled in by one scan.
    """
    directory: str = ""
    filename: str = ""

    # From pala.desktop
    title: str = ""
    author: str = ""        # passed through as declared ("?" when unknown)
    comment: str = ""

    # Non-fatal anomalies, in the order they were found
    warnings: List[str] = field(default_factory=list)

    piece_file_count: int = 0       # 1 + highest N seen in N.png members
    declared_piece_count: int = 0   # -1 if the descriptor value was not a number
    image_file_size: int = 0
    puzzle_file_size: int = 0

    @property
    def path(self) -> str:
        return os.path.join(self.directory, self.filename)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        return data
