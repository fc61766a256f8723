"""
Interaction Controller - Centralized client state

This controller is the single owner of the client's view of the game.
It handles:
- The one-shot book open flow (dialog -> engine)
- Moves, undo and reset sent to the engine
- The refresh that follows every one of them (scores + board, applied together)
- Surfacing engine rejections to the user

The board shown to the user is always decoded from the last refreshed state.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from engine.core.constants import WIDTH
from client.app.core.dialog import BookDialog
from client.app.engine.bridge import EngineBridge, EngineCommandError
from client.app.models.enums import BookPhase, Cell
from client.app.schemas.state_schema import InteractionState, StateResponse
from client.app.services.board_decoder import Grid, decode, piece_for_index

logger = logging.getLogger(__name__)

BUSY_NOTICE = "Engine is busy, wait for the current action to finish"

Listener = Callable[["InteractionController"], Awaitable[None]]


class BookNotLoadedError(Exception):
    """A game command was issued before a book was opened."""


class InteractionController:
    def __init__(self, bridge: EngineBridge, dialog: Optional[BookDialog] = None):
        self.bridge = bridge
        self.dialog = dialog
        self.phase = BookPhase.NO_BOOK_LOADED
        self.state = InteractionState()
        self.notice: Optional[str] = None
        # True while an engine request is in flight (double-submission guard)
        self.busy = False
        self._listeners: List[Listener] = []

    # --- Derived view ---

    @property
    def board(self) -> Grid:
        return decode(self.state.encoded_board)

    @property
    def current_player(self) -> Cell:
        return piece_for_index(len(self.state.encoded_board))

    def snapshot(self) -> StateResponse:
        return StateResponse(
            phase=self.phase,
            book_loaded=self.state.book_loaded,
            encoded_board=self.state.encoded_board,
            scores=self.state.scores,
            board=self.board,
            current_player=self.current_player,
            notice=self.notice,
        )

    # --- Listeners ---

    def subscribe(self, callback: Listener):
        self._listeners.append(callback)

    async def _notify(self):
        for listener in self._listeners:
            try:
                await listener(self)
            except Exception:
                logger.exception("State listener failed")

    # --- Book loading ---

    async def open_book(self, dialog: Optional[BookDialog] = None) -> bool:
        """
        Runs the open flow at most once at a time, and never again once a
        book is loaded. Cancel or engine failure allows a retry.
        """
        if self.phase != BookPhase.NO_BOOK_LOADED:
            logger.debug("open_book ignored, phase is %s", self.phase)
            return False

        # Guard must be set before the first await
        self.phase = BookPhase.OPENING
        dialog = dialog or self.dialog
        opened = False
        try:
            path = await dialog.pick_book() if dialog else None
            if not path:
                logger.info("No book selected")
                return False

            try:
                await self.bridge.invoke("open_book", book_path=path)
            except EngineCommandError as e:
                logger.error("Could not open book %s: %s", path, e.message)
                self.notice = f"Could not open book: {e.message}"
                return False
            opened = True
        finally:
            self.phase = BookPhase.BOOK_LOADED if opened else BookPhase.NO_BOOK_LOADED

        logger.info("Book loaded: %s", path)
        self.state = InteractionState(book_loaded=True)
        self.notice = None
        # Commands stay blocked until the first board and scores are applied
        self.busy = True
        try:
            await self._refresh()
        except (EngineCommandError, ValueError):
            # Not fatal: board and scores stay at their defaults
            logger.exception("Initial refresh failed")
        finally:
            self.busy = False
        await self._notify()
        return True

    # --- Game commands ---

    async def play_column(self, column: int) -> bool:
        """Returns True if the engine accepted the move."""
        if not self._begin():
            return False
        try:
            accepted = await self._play(column)
        finally:
            self.busy = False
        await self._notify()
        return accepted

    async def undo(self) -> bool:
        return await self._run_and_refresh("back_move")

    async def reset(self) -> bool:
        return await self._run_and_refresh("reset_game")

    async def refresh(self) -> bool:
        if not self._begin():
            return False
        try:
            await self._refresh()
        finally:
            self.busy = False
        await self._notify()
        return True

    # --- Internals ---

    def _begin(self) -> bool:
        if self.phase != BookPhase.BOOK_LOADED:
            raise BookNotLoadedError("Open a book first")
        if self.busy:
            logger.debug("Request dropped, engine busy")
            self.notice = BUSY_NOTICE
            return False
        self.busy = True
        return True

    async def _play(self, column: int) -> bool:
        try:
            await self.bridge.invoke("play_colm", colm=column)
        except EngineCommandError as e:
            # Illegal move: keep the current (consistent) state, skip the refresh
            logger.warning("Move in column %s rejected: %s", column, e.message)
            self.notice = f"Illegal move: {e.message}"
            return False

        self.notice = None
        await self._refresh_after_command()
        return True

    async def _run_and_refresh(self, command: str) -> bool:
        if not self._begin():
            return False
        try:
            try:
                await self.bridge.invoke(command)
            except EngineCommandError as e:
                # e.g. nothing to take back: the board is re-read either way
                logger.warning("%s failed: %s", command, e.message)
            self.notice = None
            await self._refresh_after_command()
        finally:
            self.busy = False
        await self._notify()
        return True

    async def _refresh_after_command(self):
        try:
            await self._refresh()
        except EngineCommandError as e:
            logger.error("Refresh failed after command: %s", e)
            self.notice = f"Could not refresh the board: {e.message}"

    async def _refresh(self):
        """Fetches scores and board, then swaps the state in one assignment."""
        scores = await self.bridge.invoke("columns_score")
        encoded_board = await self.bridge.invoke("get_encoded_board")

        if len(scores) != WIDTH:
            raise EngineCommandError("columns_score", f"expected {WIDTH} scores, got {len(scores)}")
        # A board the client cannot lay out is a protocol bug: raise before applying
        decode(encoded_board)

        self.state = InteractionState(
            book_loaded=True,
            encoded_board=encoded_board,
            scores=list(scores),
        )
