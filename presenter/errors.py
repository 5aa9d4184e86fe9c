"""
Exceptions raised while playing back instructions.

A ``PlaybackError`` aborts only the instruction that raised it; the player
reports it and moves on to the next instruction.
"""


class PlaybackError(Exception):
    """Base class for recoverable, per-instruction failures."""
    pass


class InvalidWaitError(PlaybackError):
    """Raised when a wait delay is neither a number nor "manual"."""
    pass


class UnknownCommandError(PlaybackError):
    """Raised when the host has no command registered under a name."""
    pass


class CommandArgumentError(PlaybackError):
    """Raised when a command is given arguments its handler does not accept."""
    pass


class FileReadError(PlaybackError):
    """Raised when an instruction's source file cannot be read."""
    pass
