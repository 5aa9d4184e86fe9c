"""
Character-by-character typing into an editor surface.
"""

from __future__ import annotations
import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Sequence

from presenter.host.base import EditorSurface, Position, Selection
from presenter.playback.timing import DelayPolicy

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class Typist:
    """
    Types text one character at a time with human-like pauses.

    Every character is its own edit, so it shows up in the editor before the
    next pause starts.

    Usage:
        typist = Typist(rng=random.Random(42))
        await typist.type(editor, list("print('hi')"), DelayPolicy(base=80, jitter=20))
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sleep: Optional[Sleep] = None
    ):
        """
        Args:
            rng: Random generator for delay jitter (seed it for repeatable runs)
            sleep: Coroutine function used to pause, in seconds
        """
        self.rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep

    async def type(
        self,
        editor: EditorSurface,
        characters: Sequence[str],
        policy: DelayPolicy
    ) -> None:
        """
        Type characters at the editor's cursor.

        A non-empty selection is deleted first. Newlines move the cursor to
        the start of the next line and scroll it into view.

        Args:
            editor: Surface to type into
            characters: Characters to type, in order
            policy: Pause between consecutive characters
        """
        if not characters:
            return

        selection = editor.selection
        if not selection.is_empty:
            await editor.delete(selection)

        position = selection.start
        logger.debug(f"Typing {len(characters)} characters at {position.line + 1}:{position.character + 1}")

        for index, char in enumerate(characters):
            editor.selection = Selection.at(position)
            await editor.insert(position, char)

            if char == "\n":
                position = Position(position.line + 1, 0)
                editor.reveal(Selection.at(position))
            else:
                position = Position(position.line, position.character + 1)

            if policy.paced and index < len(characters) - 1:
                await self._sleep(policy.draw(self.rng))

        editor.selection = Selection.at(position)
