"""
Configuration constants for the puzzle scanner.
"""

# --- Archive Member Names ---
IMAGE_MEMBER = "image.jpg"
DESKTOP_MEMBER = "pala.desktop"

# Piece images are named "0.png", "1.png", ...
# fullmatch() is used with this pattern, so no anchors are needed.
PIECE_NAME_PATTERN = r"([0-9]+)\.png"

# --- Descriptor (pala.desktop) Parsing ---
# Keys may not contain '[' or '=', so group headers like "[Desktop Entry]" never match.
KEY_VALUE_PATTERN = r"^([^\[=]+)=(.*)$"
INTEGER_PATTERN = r"[+-]?[0-9]+"

TITLE_KEY = "Name"
AUTHOR_KEY = "X-KDE-PluginInfo-Author"
COMMENT_KEY = "Comment"
PIECE_COUNT_KEYS = {"PieceCount", "020_PieceCount"}

# Stored as the declared piece count when the descriptor value is not an integer
BAD_PIECE_COUNT = -1
# Values outside the signed 64-bit range are treated as bad
PIECE_COUNT_MIN = -(2 ** 63)
PIECE_COUNT_MAX = 2 ** 63 - 1

# --- Piece Tally ---
INITIAL_TALLY_SIZE = 512
# Largest usable piece index; anything above is treated as a malformed member name
MAX_PIECE_INDEX = 999_999

# --- Reporting ---
CSV_COLUMNS = [
    "directory",
    "filename",
    "title",
    "author",
    "comment",
    "piece_file_count",
    "declared_piece_count",
    "image_file_size",
    "puzzle_file_size",
    "warnings",
]
