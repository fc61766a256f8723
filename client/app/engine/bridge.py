"""
Engine Bridge - client side of the engine command protocol

The client never computes game logic; it sends named commands and awaits
their result. Every call is awaited to completion (no timeout, no cancel).
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from engine.core.session import GameSession

logger = logging.getLogger(__name__)

# Command name -> accepted argument names
COMMANDS = {
    "open_book": {"book_path"},
    "columns_score": set(),
    "get_encoded_board": set(),
    "play_colm": {"colm"},
    "back_move": set(),
    "reset_game": set(),
}


class EngineCommandError(Exception):
    """The engine refused or failed a command."""

    def __init__(self, command: str, message: str):
        self.command = command
        self.message = message
        super().__init__(f"{command}: {message}")


class EngineBridge(ABC):
    @abstractmethod
    async def invoke(self, command: str, **args) -> Any:
        """Send a command to the engine and return its result"""
        pass


class LocalEngineBridge(EngineBridge):
    """Runs commands against an in-process GameSession in a worker thread."""

    def __init__(self, session: Optional[GameSession] = None):
        self.session = session if session is not None else GameSession()

    async def invoke(self, command: str, **args) -> Any:
        allowed = COMMANDS.get(command)
        if allowed is None:
            raise EngineCommandError(command, "unknown command")
        if set(args) != allowed:
            raise EngineCommandError(command, f"expected arguments {sorted(allowed)}, got {sorted(args)}")

        handler = getattr(self.session, command)
        try:
            return await asyncio.to_thread(handler, **args)
        except (ValueError, OSError) as e:
            logger.debug("Engine command %s failed: %s", command, e)
            raise EngineCommandError(command, str(e)) from e
