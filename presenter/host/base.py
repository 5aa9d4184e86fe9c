"""
Host interfaces the player drives.

The player never talks to an editor directly. It goes through a ``Host``
that exposes the active editing surface, a command registry and file
reading, so playback can target an in-memory buffer, a terminal or a real
editor integration.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from presenter.errors import FileReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line/character position in a document."""
    line: int
    character: int


@dataclass(frozen=True)
class Selection:
    """A selection from ``anchor`` to ``active`` (the cursor end)."""
    anchor: Position
    active: Position

    @classmethod
    def at(cls, position: Position) -> Selection:
        """Create an empty selection (a cursor) at a position."""
        return cls(position, position)

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active


class EditorSurface(ABC):
    """An editor showing one document, with a cursor and selection."""

    @property
    @abstractmethod
    def selection(self) -> Selection:
        """The current selection."""
        pass

    @selection.setter
    @abstractmethod
    def selection(self, value: Selection) -> None:
        pass

    @abstractmethod
    async def insert(self, position: Position, text: str) -> None:
        """Insert text at a position as a single edit."""
        pass

    @abstractmethod
    async def delete(self, selection: Selection) -> None:
        """Delete the text covered by a selection as a single edit."""
        pass

    @abstractmethod
    def reveal(self, selection: Selection, center: bool = False) -> None:
        """Scroll so that the selection is visible."""
        pass


class Host(ABC):
    """The environment instructions are played against."""

    @property
    @abstractmethod
    def workspace_root(self) -> Optional[Path]:
        """Root folder of the open workspace, or None if there is none."""
        pass

    @property
    @abstractmethod
    def active_editor(self) -> Optional[EditorSurface]:
        """The focused editor, or None if no document is open."""
        pass

    @abstractmethod
    async def execute_command(self, name: str, *args: Any) -> Any:
        """
        Run a named command and wait for it to finish.

        Raises:
            UnknownCommandError: If no command is registered under ``name``
        """
        pass

    def read_file(self, qualified_path: str) -> str:
        """
        Read a source file for typing.

        Returns an empty string when there is no workspace.

        Raises:
            FileReadError: If the file exists in the workspace but cannot be read
        """
        if self.workspace_root is None:
            return ""
        try:
            return Path(qualified_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {qualified_path}: {e}")
            raise FileReadError(f"Cannot read '{qualified_path}': {e}") from e
