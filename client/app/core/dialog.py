"""
Book Dialog - picks the book file to open

The controller only needs a path or None (the user cancelled).
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional


class BookDialog(ABC):
    @abstractmethod
    async def pick_book(self) -> Optional[str]:
        """Return the selected book path, or None if nothing was selected"""
        pass


class StaticBookDialog(BookDialog):
    """Answers with a path known up front (API request body, BOOK_PATH)."""

    def __init__(self, path: Optional[str]):
        self.path = path

    async def pick_book(self) -> Optional[str]:
        return self.path or None


class ConsoleBookDialog(BookDialog):
    """Reads a path from stdin. Blank input counts as cancel."""

    def __init__(self, prompt: str = "Book file: "):
        self.prompt = prompt

    async def pick_book(self) -> Optional[str]:
        answer = await asyncio.to_thread(input, self.prompt)
        return answer.strip() or None
