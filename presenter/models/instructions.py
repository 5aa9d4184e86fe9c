"""
Instruction models for scripted playback programs.

An instruction file is a JSON array of objects tagged by ``type``. Each tag
maps to one of the models below; tags that are not recognized load as
``UnknownInstruction`` so the player can report them.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class InstructionType(str, Enum):
    """Kinds of instructions understood by the player."""
    COMMAND = "command"
    WAIT = "wait"
    TYPE_TEXT = "typeText"
    TYPE_TEXT_FROM_FILE = "typeTextFromFile"
    TYPE_CHUNKS_FROM_FILE = "typeChunksFromFile"
    OPEN_FILE = "openFile"
    CREATE_FILE = "createFile"
    GOTO = "goto"
    SELECT = "select"


MANUAL = "manual"


class BaseInstruction(BaseModel):
    """Fields shared by every instruction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    skip: bool = Field(default=False, description="Drop this instruction when loading")


class Command(BaseInstruction):
    """Run a host command one or more times."""

    type: Literal["command"] = "command"
    command: str
    args: List[Any] = Field(default_factory=list)
    repeat: int = Field(default=1, ge=1)


class Wait(BaseInstruction):
    """Sleep for ``delay`` milliseconds, or until resumed when ``delay`` is "manual"."""

    type: Literal["wait"] = "wait"
    delay: Union[StrictInt, str]
    save: bool = False

    @property
    def is_manual(self) -> bool:
        return self.delay == MANUAL


class TypeText(BaseInstruction):
    """Type the given lines, joined with newlines."""

    type: Literal["typeText"] = "typeText"
    text: List[str]
    delay: Optional[int] = Field(default=None, ge=0)


class FileInstruction(BaseInstruction):
    """An instruction whose text comes from a file next to the instruction file."""

    path: str
    qualified_path: Optional[str] = Field(default=None, alias="qualifiedPath")
    delay: Optional[int] = Field(default=None, ge=0)


class TypeTextFromFile(FileInstruction):
    """Type the whole content of a file."""

    type: Literal["typeTextFromFile"] = "typeTextFromFile"


class TypeChunksFromFile(FileInstruction):
    """Type a file chunk by chunk, waiting for a manual resume after each chunk."""

    type: Literal["typeChunksFromFile"] = "typeChunksFromFile"
    wait_instead_of_typing: Optional[List[str]] = Field(default=None, alias="waitInsteadOfTyping")
    wait_after_typing: Optional[List[str]] = Field(default=None, alias="waitAfterTyping")
    wait_after_new_line: Optional[bool] = Field(default=None, alias="waitAfterNewLine")
    skip_lines_containing: Optional[List[str]] = Field(default=None, alias="skipLinesContaining")


class OpenFile(BaseInstruction):
    """Open a workspace-relative file."""

    type: Literal["openFile"] = "openFile"
    path: str


class CreateFile(BaseInstruction):
    """Create a workspace-relative file if it is missing, then open it."""

    type: Literal["createFile"] = "createFile"
    path: str


class GoTo(BaseInstruction):
    """Move the cursor to a 1-based line and column."""

    type: Literal["goto"] = "goto"
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)


class Select(BaseInstruction):
    """Extend the selection to a 1-based line and column."""

    type: Literal["select"] = "select"
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)


class UnknownInstruction(BaseInstruction):
    """An entry whose ``type`` tag is not recognized."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = ""


Instruction = Union[
    Command,
    Wait,
    TypeText,
    TypeTextFromFile,
    TypeChunksFromFile,
    OpenFile,
    CreateFile,
    GoTo,
    Select,
    UnknownInstruction,
]


INSTRUCTION_MODELS: Dict[InstructionType, Type[BaseInstruction]] = {
    InstructionType.COMMAND: Command,
    InstructionType.WAIT: Wait,
    InstructionType.TYPE_TEXT: TypeText,
    InstructionType.TYPE_TEXT_FROM_FILE: TypeTextFromFile,
    InstructionType.TYPE_CHUNKS_FROM_FILE: TypeChunksFromFile,
    InstructionType.OPEN_FILE: OpenFile,
    InstructionType.CREATE_FILE: CreateFile,
    InstructionType.GOTO: GoTo,
    InstructionType.SELECT: Select,
}


def instruction_kind(instruction: BaseInstruction) -> Optional[InstructionType]:
    """Return the instruction's kind, or None if its tag is not recognized."""
    try:
        return InstructionType(getattr(instruction, "type", None))
    except ValueError:
        return None


def parse_instruction(data: Dict[str, Any]) -> Instruction:
    """
    Build an instruction model from a raw JSON object.

    Raises:
        pydantic.ValidationError: If a recognized instruction has invalid fields
    """
    try:
        model = INSTRUCTION_MODELS[InstructionType(data.get("type"))]
    except ValueError:
        model = UnknownInstruction
    return model.model_validate(data)
