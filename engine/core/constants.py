# engine/core/constants.py

# --- Board Dimensions ---
WIDTH = 7
HEIGHT = 6
# Bits per column include a sentinel row to prevent bit-shift overflows
COLUMN_BITS = HEIGHT + 1
MAX_MOVES = WIDTH * HEIGHT

# --- Opening Book ---
# Each record is 7 little-endian key bytes followed by one score byte.
BOOK_RECORD_SIZE = 8
BOOK_KEY_SIZE = 7
# Scores are stored unsigned: byte = score + SCORE_SHIFT
SCORE_SHIFT = 127
