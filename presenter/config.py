"""
Configuration management for Presentation Buddy playback.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field
import yaml


class PlaybackConfig(BaseModel):
    """Defaults used when an instruction does not set its own values."""

    delay: int = Field(default=100, ge=0, description="Step delay and default typing delay in milliseconds")
    randomness: int = Field(default=25, ge=0, description="Maximum jitter applied to the typing delay in milliseconds")

    wait_after_typing: List[str] = Field(default_factory=list, description="Markers that end a chunk after being typed")
    wait_instead_of_typing: List[str] = Field(default_factory=list, description="Markers that end a chunk and are never typed")
    skip_lines_containing: List[str] = Field(default_factory=list, description="Lines containing any of these are not typed")
    wait_after_new_line: bool = Field(default=True, description="End a chunk after every newline")

    save_all_command: str = Field(default="saveAll", description="Host command run by a wait with save enabled")
    cursor_home_command: str = Field(default="cursorHome", description="Host command run after a chunk ending in a newline")
    open_command: str = Field(default="open", description="Host command used to open files")

    @classmethod
    def from_file(cls, path: Path) -> PlaybackConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @classmethod
    def discover(cls, workspace_root: Optional[Path]) -> PlaybackConfig:
        """Load ``.presentation-buddy/settings.yaml`` under the workspace, or defaults."""
        if workspace_root is not None:
            settings = Path(workspace_root) / ".presentation-buddy" / "settings.yaml"
            if settings.is_file():
                return cls.from_file(settings)
        return cls()

    def to_file(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)
