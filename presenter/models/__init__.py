"""
Data models for playback programs.
"""

from presenter.models.instructions import (
    BaseInstruction,
    Command,
    CreateFile,
    FileInstruction,
    GoTo,
    Instruction,
    InstructionType,
    INSTRUCTION_MODELS,
    MANUAL,
    OpenFile,
    Select,
    TypeChunksFromFile,
    TypeText,
    TypeTextFromFile,
    UnknownInstruction,
    Wait,
    instruction_kind,
    parse_instruction,
)

__all__ = [
    "BaseInstruction",
    "Command",
    "CreateFile",
    "FileInstruction",
    "GoTo",
    "Instruction",
    "InstructionType",
    "INSTRUCTION_MODELS",
    "MANUAL",
    "OpenFile",
    "Select",
    "TypeChunksFromFile",
    "TypeText",
    "TypeTextFromFile",
    "UnknownInstruction",
    "Wait",
    "instruction_kind",
    "parse_instruction",
]
