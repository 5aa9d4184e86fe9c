"""
Tests for instruction models and configuration.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from presenter.config import PlaybackConfig
from presenter.models.instructions import (
    Command,
    GoTo,
    InstructionType,
    TypeChunksFromFile,
    UnknownInstruction,
    Wait,
    instruction_kind,
    parse_instruction,
)


class TestInstructions:
    """Tests for instruction models."""

    def test_parse_by_type(self):
        """Test that the type tag selects the model."""
        instruction = parse_instruction({"type": "command", "command": "cursorEnd", "args": [1]})
        assert isinstance(instruction, Command)
        assert instruction.repeat == 1
        assert instruction_kind(instruction) == InstructionType.COMMAND

    def test_camel_case_aliases(self):
        """Test that camelCase keys from JSON populate the fields."""
        instruction = parse_instruction({
            "type": "typeChunksFromFile",
            "path": "a.py",
            "waitInsteadOfTyping": ["/*pause*/"],
            "waitAfterNewLine": False,
            "skipLinesContaining": ["#region"],
        })
        assert isinstance(instruction, TypeChunksFromFile)
        assert instruction.wait_instead_of_typing == ["/*pause*/"]
        assert instruction.wait_after_new_line is False
        assert instruction.skip_lines_containing == ["#region"]
        assert instruction.wait_after_typing is None
        assert instruction.qualified_path is None

    def test_goto_defaults(self):
        """Test that goto defaults to the first line and column."""
        goto = parse_instruction({"type": "goto"})
        assert (goto.line, goto.column) == (1, 1)

    def test_repeat_must_be_positive(self):
        """Test that a zero repeat is rejected."""
        with pytest.raises(ValidationError):
            Command(command="x", repeat=0)

    def test_instructions_are_frozen(self):
        """Test that instructions cannot be changed after loading."""
        goto = GoTo(line=2)
        with pytest.raises(ValidationError):
            goto.line = 3

    def test_unknown_type(self):
        """Test that unrecognized tags load as UnknownInstruction."""
        instruction = parse_instruction({"type": "fly", "altitude": 3})
        assert isinstance(instruction, UnknownInstruction)
        assert instruction_kind(instruction) is None

    def test_wait_modes(self):
        """Test that waits distinguish manual and timed delays."""
        assert Wait(delay="manual").is_manual
        assert not Wait(delay=200).is_manual
        assert Wait(delay=200).delay == 200

    def test_wait_rejects_booleans(self):
        """Test that a boolean delay is rejected instead of read as 1 ms."""
        with pytest.raises(ValidationError):
            parse_instruction({"type": "wait", "delay": True})


class TestPlaybackConfig:
    """Tests for PlaybackConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = PlaybackConfig()
        assert config.delay == 100
        assert config.randomness == 25
        assert config.wait_after_new_line is True
        assert config.save_all_command == "saveAll"

    def test_yaml_file(self, tmp_path: Path):
        """Test saving and loading settings as YAML."""
        path = tmp_path / "settings.yaml"
        PlaybackConfig(delay=40, wait_after_typing=[";"]).to_file(path)

        loaded = PlaybackConfig.from_file(path)

        assert loaded.delay == 40
        assert loaded.wait_after_typing == [";"]

    def test_discover(self, tmp_path: Path):
        """Test that workspace settings are picked up when present."""
        assert PlaybackConfig.discover(tmp_path) == PlaybackConfig()

        settings = tmp_path / ".presentation-buddy" / "settings.yaml"
        settings.parent.mkdir()
        settings.write_text("randomness: 5\n")

        assert PlaybackConfig.discover(tmp_path).randomness == 5
