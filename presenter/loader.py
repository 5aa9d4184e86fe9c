"""
Locates, parses and initializes instruction files.
"""

from __future__ import annotations
import logging
from importlib import resources
from pathlib import Path
from typing import Callable, List, Optional

import json5
from pydantic import ValidationError

from presenter.models.instructions import FileInstruction, Instruction, parse_instruction

logger = logging.getLogger(__name__)

PB_PATH = ".presentation-buddy"
PB_FILE = "instructions.json"


class InstructionFileError(Exception):
    """Raised when an instruction file cannot be parsed."""
    pass


def candidate_paths(workspace_root: Path) -> List[Path]:
    """
    List the places an instruction file may live, closest first.

    For ``/a/b`` this yields ``/a/b/.presentation-buddy/instructions.json``,
    then ``/a/.presentation-buddy/b/instructions.json`` and finally
    ``/.presentation-buddy/a/b/instructions.json``.
    """
    parts = Path(workspace_root).parts
    return [
        Path(*parts[:i], PB_PATH, *parts[i:], PB_FILE)
        for i in range(len(parts), 0, -1)
    ]


def find_instruction_file(workspace_root: Path) -> Optional[Path]:
    """Return the closest existing instruction file, or None."""
    for path in candidate_paths(workspace_root):
        if path.is_file():
            return path
    return None


def parse_instruction_file(
    path: Path,
    on_error: Optional[Callable[[str], None]] = None
) -> List[Instruction]:
    """
    Parse an instruction file.

    Skipped entries are dropped and file-reading instructions get their
    ``qualified_path`` resolved against the file's directory. Entries that
    fail validation are reported and dropped.

    Raises:
        InstructionFileError: If the file is not a JSON array
    """
    try:
        data = json5.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise InstructionFileError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, list):
        raise InstructionFileError(f"{path} must contain a list of instructions")

    directory = Path(path).parent
    instructions: List[Instruction] = []

    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            _report(on_error, f"Instruction {index + 1} in {path} is not an object")
            continue
        if raw.get("skip"):
            continue

        try:
            instruction = parse_instruction(raw)
        except ValidationError as e:
            _report(on_error, f"Invalid instruction {index + 1} ({raw.get('type')}) in {path}: {e}")
            continue

        if isinstance(instruction, FileInstruction):
            instruction = instruction.model_copy(
                update={"qualified_path": str(directory / instruction.path)}
            )
        instructions.append(instruction)

    logger.info(f"Loaded {len(instructions)} instructions from {path}")
    return instructions


def load_instructions(
    workspace_root: Path,
    on_error: Optional[Callable[[str], None]] = None
) -> List[Instruction]:
    """
    Load the program for a workspace.

    If no instruction file exists, every searched path is reported and an
    empty program is returned.

    Raises:
        InstructionFileError: If the instruction file found is malformed
    """
    path = find_instruction_file(workspace_root)
    if path is not None:
        return parse_instruction_file(path, on_error)

    searched = "\n".join(f"• {p}" for p in candidate_paths(workspace_root))
    _report(on_error, f"Couldn't start Presentation Buddy - no {PB_FILE} found.\n\nSearched:\n\n{searched}\n")
    return []


def init_instructions(
    workspace_root: Path,
    confirm: Optional[Callable[[str], bool]] = None
) -> Optional[Path]:
    """
    Write the starter instruction file into a workspace.

    Args:
        workspace_root: Workspace to initialize
        confirm: Asked before overwriting an existing file; overwriting is
            refused when not given

    Returns:
        The written path, or None if the existing file was kept
    """
    template = (resources.files("presenter") / "templates" / PB_FILE).read_text(encoding="utf-8")
    target = Path(workspace_root) / PB_PATH / PB_FILE

    if target.exists():
        if confirm is None or not confirm(f"File {target} exists: overwrite it?"):
            logger.info(f"Kept existing {target}")
            return None
    else:
        target.parent.mkdir(parents=True, exist_ok=True)

    target.write_text(template, encoding="utf-8")
    logger.info(f"Wrote {target}")
    return target


def _report(on_error: Optional[Callable[[str], None]], message: str) -> None:
    logger.error(message)
    if on_error:
        on_error(message)
