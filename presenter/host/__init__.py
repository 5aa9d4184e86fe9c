"""
Hosts that instructions are played against.
"""

from presenter.host.base import EditorSurface, Host, Position, Selection
from presenter.host.memory import MemoryEditor, MemoryHost, TextDocument

__all__ = [
    "EditorSurface",
    "Host",
    "Position",
    "Selection",
    "MemoryEditor",
    "MemoryHost",
    "TextDocument",
]
