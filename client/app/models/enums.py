from enum import IntEnum, StrEnum


class Cell(IntEnum):
    EMPTY = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2


class BookPhase(StrEnum):
    NO_BOOK_LOADED = "NO_BOOK_LOADED"
    OPENING = "OPENING"
    BOOK_LOADED = "BOOK_LOADED"
