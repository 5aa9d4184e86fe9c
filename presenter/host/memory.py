"""
In-memory host for playing instructions without a real editor.

Documents are held as lists of lines. Files are read from disk when opened
and written back by the ``saveAll`` command. Optional callbacks let a caller
mirror typing to a terminal.
"""

from __future__ import annotations
import inspect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from presenter.host.base import EditorSurface, Host, Position, Selection
from presenter.errors import CommandArgumentError, FileReadError, UnknownCommandError

logger = logging.getLogger(__name__)


@dataclass
class TextDocument:
    """A text buffer, optionally backed by a file."""
    path: Optional[Path] = None
    lines: List[str] = field(default_factory=lambda: [""])
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str, path: Optional[Path] = None) -> TextDocument:
        return cls(path=path, lines=text.replace("\r\n", "\n").split("\n"))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def end(self) -> Position:
        return Position(len(self.lines) - 1, len(self.lines[-1]))

    def clamp(self, position: Position) -> Position:
        """Clamp a position to the document bounds."""
        line = max(0, min(position.line, len(self.lines) - 1))
        character = max(0, min(position.character, len(self.lines[line])))
        return Position(line, character)

    def insert(self, position: Position, text: str) -> Position:
        """Insert text and return the position right after it."""
        position = self.clamp(position)
        line = self.lines[position.line]
        before, after = line[:position.character], line[position.character:]
        parts = text.split("\n")

        if len(parts) == 1:
            self.lines[position.line] = before + text + after
            end = Position(position.line, position.character + len(text))
        else:
            new_lines = [before + parts[0]] + parts[1:-1] + [parts[-1] + after]
            self.lines[position.line:position.line + 1] = new_lines
            end = Position(position.line + len(parts) - 1, len(parts[-1]))

        self.dirty = True
        return end

    def delete(self, start: Position, end: Position) -> str:
        """Delete the text between two positions and return it."""
        start, end = self.clamp(min(start, end)), self.clamp(max(start, end))
        removed = self.get_text(start, end)
        merged = self.lines[start.line][:start.character] + self.lines[end.line][end.character:]
        self.lines[start.line:end.line + 1] = [merged]
        if removed:
            self.dirty = True
        return removed

    def get_text(self, start: Position, end: Position) -> str:
        if start.line == end.line:
            return self.lines[start.line][start.character:end.character]
        chunks = [self.lines[start.line][start.character:]]
        chunks.extend(self.lines[start.line + 1:end.line])
        chunks.append(self.lines[end.line][:end.character])
        return "\n".join(chunks)


class MemoryEditor(EditorSurface):
    """An editor over a ``TextDocument``."""

    def __init__(
        self,
        document: TextDocument,
        on_insert: Optional[Callable[[str], None]] = None
    ):
        self.document = document
        self.on_insert = on_insert
        self.visible_line = 0
        self._selection = Selection.at(Position(0, 0))

    @property
    def selection(self) -> Selection:
        return self._selection

    @selection.setter
    def selection(self, value: Selection) -> None:
        self._selection = Selection(
            self.document.clamp(value.anchor),
            self.document.clamp(value.active)
        )

    async def insert(self, position: Position, text: str) -> None:
        end = self.document.insert(position, text)
        self._selection = Selection.at(end)
        if self.on_insert:
            self.on_insert(text)

    async def delete(self, selection: Selection) -> None:
        self.document.delete(selection.start, selection.end)
        self.selection = Selection.at(selection.start)

    def reveal(self, selection: Selection, center: bool = False) -> None:
        self.visible_line = selection.active.line
        logger.debug(f"Revealed line {self.visible_line + 1} (center={center})")


class MemoryHost(Host):
    """
    Host that keeps documents in memory.

    Usage:
        host = MemoryHost(workspace_root=Path("demo"))
        await host.execute_command("open", "main.py")
        await host.active_editor.insert(Position(0, 0), "print('hi')")
        await host.execute_command("saveAll")
    """

    def __init__(
        self,
        workspace_root: Optional[Path] = None,
        on_insert: Optional[Callable[[str], None]] = None,
        on_open: Optional[Callable[[Path], None]] = None
    ):
        self._workspace_root = Path(workspace_root) if workspace_root is not None else None
        self.on_insert = on_insert
        self.on_open = on_open

        self.documents: Dict[Path, TextDocument] = {}
        self._editors: Dict[Path, MemoryEditor] = {}
        self._active: Optional[MemoryEditor] = None

        self._commands: Dict[str, Callable[..., Any]] = {
            "open": self._open,
            "saveAll": self._save_all,
            "cursorHome": self._cursor_home,
            "cursorEnd": self._cursor_end,
            "cursorUp": self._cursor_up,
            "cursorDown": self._cursor_down,
            "cursorLeft": self._cursor_left,
            "cursorRight": self._cursor_right,
            "cursorTop": self._cursor_top,
            "cursorBottom": self._cursor_bottom,
            "deleteLeft": self._delete_left,
            "selectAll": self._select_all,
        }

    @property
    def workspace_root(self) -> Optional[Path]:
        return self._workspace_root

    @property
    def active_editor(self) -> Optional[MemoryEditor]:
        return self._active

    @property
    def commands(self) -> List[str]:
        return sorted(self._commands)

    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        """Register (or replace) a command. Handlers may be sync or async."""
        self._commands[name] = handler

    async def execute_command(self, name: str, *args: Any) -> Any:
        handler = self._commands.get(name)
        if handler is None:
            raise UnknownCommandError(f"Unknown command '{name}'")

        try:
            inspect.signature(handler).bind(*args)
        except TypeError as e:
            raise CommandArgumentError(f"Invalid arguments for command '{name}': {e}") from e

        logger.debug(f"Command: {name} {list(args)}")
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    # =========================================================================
    # Documents
    # =========================================================================

    def _resolve(self, path: Any) -> Path:
        path = Path(path)
        if not path.is_absolute() and self._workspace_root is not None:
            path = self._workspace_root / path
        return path

    def _open(self, path: Any) -> MemoryEditor:
        path = self._resolve(path)

        if path not in self.documents:
            if path.is_file():
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    raise FileReadError(f"Cannot open '{path}': {e}") from e
                document = TextDocument.from_text(text, path=path)
            else:
                document = TextDocument(path=path)
            self.documents[path] = document
            self._editors[path] = MemoryEditor(document, on_insert=self.on_insert)

        self._active = self._editors[path]
        logger.info(f"Opened {path}")
        if self.on_open:
            self.on_open(path)
        return self._active

    def _save_all(self) -> int:
        saved = 0
        for document in self.documents.values():
            if document.dirty and document.path is not None:
                document.path.parent.mkdir(parents=True, exist_ok=True)
                document.path.write_text(document.text, encoding="utf-8")
                document.dirty = False
                saved += 1
        logger.info(f"Saved {saved} document(s)")
        return saved

    # =========================================================================
    # Cursor commands
    # =========================================================================

    def _move_cursor(self, target: Callable[[TextDocument, Position], Position]) -> None:
        editor = self._active
        if editor is None:
            return
        editor.selection = Selection.at(target(editor.document, editor.selection.active))

    def _cursor_home(self) -> None:
        def target(document: TextDocument, pos: Position) -> Position:
            line = document.lines[pos.line]
            first_non_blank = len(line) - len(line.lstrip())
            return Position(pos.line, 0 if pos.character == first_non_blank else first_non_blank)
        self._move_cursor(target)

    def _cursor_end(self) -> None:
        self._move_cursor(lambda doc, pos: Position(pos.line, len(doc.lines[pos.line])))

    def _cursor_up(self) -> None:
        self._move_cursor(lambda doc, pos: doc.clamp(Position(pos.line - 1, pos.character)))

    def _cursor_down(self) -> None:
        self._move_cursor(lambda doc, pos: doc.clamp(Position(pos.line + 1, pos.character)))

    def _cursor_left(self) -> None:
        self._move_cursor(_left_of)

    def _cursor_right(self) -> None:
        def target(document: TextDocument, pos: Position) -> Position:
            if pos.character < len(document.lines[pos.line]):
                return Position(pos.line, pos.character + 1)
            if pos.line < len(document.lines) - 1:
                return Position(pos.line + 1, 0)
            return pos
        self._move_cursor(target)

    def _cursor_top(self) -> None:
        self._move_cursor(lambda doc, pos: Position(0, 0))

    def _cursor_bottom(self) -> None:
        self._move_cursor(lambda doc, pos: doc.end)

    async def _delete_left(self) -> None:
        editor = self._active
        if editor is None:
            return
        selection = editor.selection
        if selection.is_empty:
            selection = Selection(_left_of(editor.document, selection.active), selection.active)
        if not selection.is_empty:
            await editor.delete(selection)

    def _select_all(self) -> None:
        editor = self._active
        if editor is None:
            return
        editor.selection = Selection(Position(0, 0), editor.document.end)


def _left_of(document: TextDocument, pos: Position) -> Position:
    if pos.character > 0:
        return Position(pos.line, pos.character - 1)
    if pos.line > 0:
        return Position(pos.line - 1, len(document.lines[pos.line - 1]))
    return pos
