from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from engine.core.constants import WIDTH
from client.app.models.enums import BookPhase, Cell


def _no_scores() -> List[Optional[int]]:
    return [None] * WIDTH


class InteractionState(BaseModel):
    # Replaced as a whole on every refresh, never edited in place
    model_config = ConfigDict(frozen=True)

    book_loaded: bool = False
    encoded_board: str = ""
    scores: List[Optional[int]] = Field(default_factory=_no_scores)


class BookRequest(BaseModel):
    path: Optional[str] = None


class StateResponse(BaseModel):
    phase: BookPhase
    book_loaded: bool
    encoded_board: str
    scores: List[Optional[int]]
    board: List[List[Cell]]
    current_player: Cell
    notice: Optional[str] = None
