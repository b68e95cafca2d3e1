"""
The single exception type raised by the puzzle scanner.

Every failure carries what was being attempted, which file it concerned and,
usually, the lower-level error that caused it. Callers tell failure modes apart
by looking at ``action`` or ``base_error``.
"""
from typing import Optional


class PuzzleScanError(Exception):
    """Raised when a .puzzle file cannot be scanned."""

    def __init__(self, action: str, file_path: str, base_error: Optional[BaseException] = None):
        super().__init__(action, file_path, base_error)
        self.action = action            # What we were trying to do
        self.file_path = file_path      # Which file we were trying to parse
        self.base_error = base_error    # Error from another module

    def __str__(self) -> str:
        cause = ""
        be = self.base_error
        if be is not None:
            # OSError already names the file; keep only its reason
            if isinstance(be, OSError) and be.filename is not None and be.strerror:
                cause = f": {be.strerror}"
            else:
                cause = f": {str(be) or type(be).__name__}"
        return f'cannot {self.action} "{self.file_path}"{cause}'
