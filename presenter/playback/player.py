"""
Instruction player that replays a program against a host.
"""

from __future__ import annotations
import asyncio
import logging
import random
from collections import deque
from pathlib import Path
from typing import Awaitable, Callable, Dict, Iterable, Optional

from presenter.config import PlaybackConfig
from presenter.errors import InvalidWaitError, PlaybackError
from presenter.host.base import Host, Position, Selection
from presenter.models.instructions import (
    BaseInstruction,
    Command,
    CreateFile,
    FileInstruction,
    GoTo,
    InstructionType,
    OpenFile,
    Select,
    TypeChunksFromFile,
    TypeText,
    TypeTextFromFile,
    Wait,
    instruction_kind,
)
from presenter.playback.chunker import split_text_into_chunks
from presenter.playback.gate import ManualWaitGate
from presenter.playback.timing import DelayPolicy
from presenter.playback.typist import Sleep, Typist

logger = logging.getLogger(__name__)

Handler = Callable[[BaseInstruction], Awaitable[None]]


class InstructionPlayer:
    """
    Plays back instructions one at a time against a host.

    Each instruction's handler is awaited to completion before the next
    instruction starts, so every step sees the editor as the previous steps
    left it. A failing instruction is reported and skipped; the rest of the
    program still runs.

    Usage:
        player = InstructionPlayer(MemoryHost(workspace_root=root))
        player.on_error = print

        # Manual waits end when something calls player.resume()
        await player.play(load_instructions(root))
    """

    def __init__(
        self,
        host: Host,
        config: Optional[PlaybackConfig] = None,
        gate: Optional[ManualWaitGate] = None,
        rng: Optional[random.Random] = None,
        sleep: Optional[Sleep] = None
    ):
        """
        Initialize the player.

        Args:
            host: Editor, command and file collaborators to play against
            config: Default delays, chunking rules and command names
            gate: Gate used by manual waits (a private one by default)
            rng: Random generator for typing jitter
            sleep: Coroutine function used for every pause, in seconds
        """
        self.host = host
        self.config = config or PlaybackConfig()
        self.gate = gate or ManualWaitGate()
        self._sleep = sleep or asyncio.sleep
        self.typist = Typist(rng=rng, sleep=self._sleep)

        # Callbacks
        self.on_instruction: Optional[Callable[[BaseInstruction], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None
        self.on_complete: Optional[Callable[[], None]] = None

        # State
        self.is_playing = False
        self.current_index = 0
        self.total_instructions = 0

        self._handlers: Dict[InstructionType, Handler] = {
            InstructionType.COMMAND: self._execute_command,
            InstructionType.WAIT: self._execute_wait,
            InstructionType.TYPE_TEXT: self._execute_type_text,
            InstructionType.TYPE_TEXT_FROM_FILE: self._execute_type_text_from_file,
            InstructionType.TYPE_CHUNKS_FROM_FILE: self._execute_type_chunks_from_file,
            InstructionType.OPEN_FILE: self._execute_open_file,
            InstructionType.CREATE_FILE: self._execute_create_file,
            InstructionType.GOTO: self._execute_goto,
            InstructionType.SELECT: self._execute_select,
        }

    async def play(self, instructions: Iterable[BaseInstruction]) -> None:
        """
        Play instructions in order.

        Args:
            instructions: The program, front to back
        """
        queue = deque(i for i in instructions if not i.skip)
        self.is_playing = True
        self.current_index = 0
        self.total_instructions = len(queue)

        logger.info(f"Starting playback: {self.total_instructions} instructions")

        while queue:
            instruction = queue.popleft()
            self.current_index += 1
            await self._execute_instruction(instruction)

            if self.on_instruction:
                self.on_instruction(instruction)

        self.is_playing = False
        logger.info("Playback complete")
        if self.on_complete:
            self.on_complete()

    def resume(self) -> bool:
        """Resume a pending manual wait. Returns False if nothing was waiting."""
        return self.gate.resume()

    def get_progress(self) -> dict:
        """Get current playback progress."""
        total = self.total_instructions
        return {
            "current_instruction": self.current_index,
            "total_instructions": total,
            "progress_percent": (self.current_index / total * 100) if total > 0 else 0,
            "is_playing": self.is_playing,
            "waiting_for_resume": self.gate.waiting,
        }

    def _report(self, message: str) -> None:
        logger.error(message)
        if self.on_error:
            self.on_error(message)

    async def _execute_instruction(self, instruction: BaseInstruction) -> None:
        """Dispatch one instruction to its handler."""
        kind = instruction_kind(instruction)
        handler = self._handlers.get(kind) if kind is not None else None
        if handler is None:
            self._report(f"Unknown instruction type '{getattr(instruction, 'type', None)}'")
            return

        logger.debug(f"Executing instruction {self.current_index}/{self.total_instructions}: {kind.value}")
        try:
            await handler(instruction)
        except PlaybackError as e:
            self._report(f"Instruction {self.current_index} ({kind.value}) failed: {e}")

    async def _step_delay(self) -> None:
        await self._sleep(self.config.delay / 1000)

    async def _run_command(self, name: str, *args) -> None:
        await self.host.execute_command(name, *args)
        await self._step_delay()

    # =========================================================================
    # Handlers
    # =========================================================================

    async def _execute_command(self, instruction: Command) -> None:
        for _ in range(instruction.repeat):
            await self._run_command(instruction.command, *instruction.args)

    async def _execute_wait(self, instruction: Wait) -> None:
        if instruction.save:
            await self._run_command(self.config.save_all_command)

        if isinstance(instruction.delay, int):
            await self._sleep(instruction.delay / 1000)
        elif instruction.is_manual:
            await self.gate.wait()
        else:
            raise InvalidWaitError(f"Invalid wait delay {instruction.delay!r}, expected milliseconds or 'manual'")

    async def _execute_type_text(self, instruction: TypeText) -> None:
        await self._type(list("\n".join(instruction.text)), instruction.delay)

    async def _execute_type_text_from_file(self, instruction: TypeTextFromFile) -> None:
        text = self._read_contents(instruction)
        if text == "":
            return
        await self._type(list(text), instruction.delay)

    async def _execute_type_chunks_from_file(self, instruction: TypeChunksFromFile) -> None:
        text = self._read_contents(instruction)
        if text == "":
            return

        config = self.config
        wait_instead_of = _first_set(instruction.wait_instead_of_typing, config.wait_instead_of_typing)
        wait_after = list(_first_set(instruction.wait_after_typing, config.wait_after_typing))
        skip_lines = _first_set(instruction.skip_lines_containing, config.skip_lines_containing)
        wait_after_new_line = (
            instruction.wait_after_new_line
            if instruction.wait_after_new_line is not None
            else config.wait_after_new_line
        )
        if wait_after_new_line:
            wait_after.append("\n")

        chunks = split_text_into_chunks(text, wait_instead_of, wait_after, skip_lines)
        logger.info(f"Typing {instruction.path} in {len(chunks)} chunks")

        for chunk in chunks:
            await self._type(list(chunk), instruction.delay)
            if chunk.endswith("\n"):
                await self._run_command(self.config.cursor_home_command)
            await self.gate.wait()

    async def _execute_open_file(self, instruction: OpenFile) -> None:
        root = self.host.workspace_root
        if root is None:
            return
        await self._run_command(self.config.open_command, str(Path(root) / instruction.path))

    async def _execute_create_file(self, instruction: CreateFile) -> None:
        root = self.host.workspace_root
        if root is None:
            return

        path = Path(root) / instruction.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                path.touch()
                logger.info(f"Created {path}")
        except OSError as e:
            raise PlaybackError(f"Cannot create '{path}': {e}") from e

        await self._run_command(self.config.open_command, str(path))

    async def _execute_goto(self, instruction: GoTo) -> None:
        editor = self.host.active_editor
        if editor is None:
            return

        position = Position(instruction.line - 1, instruction.column - 1)
        editor.selection = Selection.at(position)
        editor.reveal(editor.selection, center=True)
        await self._step_delay()

    async def _execute_select(self, instruction: Select) -> None:
        editor = self.host.active_editor
        if editor is None:
            return

        end = Position(instruction.line - 1, instruction.column - 1)
        editor.selection = Selection(editor.selection.start, end)
        editor.reveal(editor.selection, center=True)
        await self._step_delay()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _read_contents(self, instruction: FileInstruction) -> str:
        path = instruction.qualified_path
        if path is None and self.host.workspace_root is not None:
            # Not loaded from an instruction file; resolve against the workspace
            path = str(Path(self.host.workspace_root) / instruction.path)
        return self.host.read_file(path or instruction.path).replace("\r\n", "\n")

    async def _type(self, characters: list, delay: Optional[int]) -> None:
        editor = self.host.active_editor
        if editor is None:
            return
        await self.typist.type(editor, characters, DelayPolicy.for_instruction(delay, self.config))


def _first_set(value, default):
    return value if value is not None else default
