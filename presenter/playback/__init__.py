"""
Scripted playback engine.

Replays instruction programs into an editor with human-like typing, pausing
between chunks until the presenter resumes.
"""

from presenter.playback.chunker import split_text_into_chunks
from presenter.playback.gate import ManualWaitGate
from presenter.playback.player import InstructionPlayer
from presenter.playback.timing import DelayPolicy
from presenter.playback.typist import Typist

__all__ = ["InstructionPlayer", "ManualWaitGate", "Typist", "DelayPolicy", "split_text_into_chunks"]
