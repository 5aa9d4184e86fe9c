"""
Shared fakes for playback tests.
"""

from pathlib import Path
from typing import Any, List, Optional

import pytest

from presenter.config import PlaybackConfig
from presenter.errors import UnknownCommandError
from presenter.host.base import EditorSurface, Host, Position, Selection
from presenter.playback import InstructionPlayer


class RecordingEditor(EditorSurface):
    """Editor that records every call instead of editing text."""

    def __init__(self, events: List[tuple], selection: Optional[Selection] = None):
        self.events = events
        self._selection = selection or Selection.at(Position(0, 0))

    @property
    def selection(self) -> Selection:
        return self._selection

    @selection.setter
    def selection(self, value: Selection) -> None:
        self._selection = value

    async def insert(self, position: Position, text: str) -> None:
        self.events.append(("insert", position, text))

    async def delete(self, selection: Selection) -> None:
        self.events.append(("delete", selection))
        self._selection = Selection.at(selection.start)

    def reveal(self, selection: Selection, center: bool = False) -> None:
        self.events.append(("reveal", selection, center))

    @property
    def inserted(self) -> str:
        return "".join(e[2] for e in self.events if e[0] == "insert")


class RecordingHost(Host):
    """Host that records commands and serves a ``RecordingEditor``."""

    def __init__(
        self,
        workspace_root: Optional[Path] = None,
        with_editor: bool = True,
        known_commands: Optional[List[str]] = None
    ):
        self.events: List[tuple] = []
        self._workspace_root = workspace_root
        self.editor = RecordingEditor(self.events) if with_editor else None
        self.known_commands = known_commands

    @property
    def workspace_root(self) -> Optional[Path]:
        return self._workspace_root

    @property
    def active_editor(self) -> Optional[RecordingEditor]:
        return self.editor

    async def execute_command(self, name: str, *args: Any) -> Any:
        if self.known_commands is not None and name not in self.known_commands:
            raise UnknownCommandError(f"Unknown command '{name}'")
        self.events.append(("command", name, args))

    @property
    def commands(self) -> List[tuple]:
        return [e[1:] for e in self.events if e[0] == "command"]


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records durations."""

    def __init__(self, events: Optional[List[tuple]] = None):
        self.durations: List[float] = []
        self.events = events

    async def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        if self.events is not None:
            self.events.append(("sleep", seconds))


@pytest.fixture
def config() -> PlaybackConfig:
    return PlaybackConfig(delay=100, randomness=25)


@pytest.fixture
def host(tmp_path: Path) -> RecordingHost:
    return RecordingHost(workspace_root=tmp_path)


@pytest.fixture
def sleeper(host: RecordingHost) -> SleepRecorder:
    return SleepRecorder(host.events)


@pytest.fixture
def player(host: RecordingHost, config: PlaybackConfig, sleeper: SleepRecorder) -> InstructionPlayer:
    errors: List[str] = []
    player = InstructionPlayer(host, config=config, sleep=sleeper)
    player.on_error = errors.append
    player.errors = errors
    return player
