"""
Splits file content into chunks that are typed one burst at a time.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence


def remove_lines_containing(text: str, needles: Iterable[str]) -> str:
    """Drop every line (with its newline) that contains any of ``needles``."""
    needles = [n for n in needles if n]
    if not needles:
        return text
    lines = text.split("\n")
    kept = []
    for number, line in enumerate(lines, start=1):
        if any(n in line for n in needles):
            continue
        kept.append(line if number == len(lines) else line + "\n")
    return "".join(kept)


def _match(text: str, index: int, markers: Sequence[str]) -> Optional[str]:
    """Return the longest marker found at ``index`` (first declared wins ties)."""
    found = None
    for marker in markers:
        if text.startswith(marker, index) and (found is None or len(marker) > len(found)):
            found = marker
    return found


def split_text_into_chunks(
    text: str,
    split_instead_of_typing: Iterable[str] = (),
    split_after_typing: Iterable[str] = (),
    skip_lines_containing: Iterable[str] = ()
) -> List[str]:
    """
    Split text into chunks at marker positions.

    Lines containing any ``skip_lines_containing`` string are removed first.
    A ``split_instead_of_typing`` marker ends the current chunk and is
    dropped; a ``split_after_typing`` marker is kept as the last part of the
    chunk it ends. When both kinds match at the same offset the
    instead-of-typing marker wins.

    Args:
        text: Text to split
        split_instead_of_typing: Markers replaced by a pause
        split_after_typing: Markers followed by a pause
        skip_lines_containing: Lines containing any of these are not typed

    Returns:
        Non-empty chunks in order
    """
    instead = [m for m in split_instead_of_typing if m]
    after = [m for m in split_after_typing if m]
    text = remove_lines_containing(text, skip_lines_containing)

    chunks: List[str] = []
    buffer: List[str] = []
    index = 0

    while index < len(text):
        marker = _match(text, index, instead)
        if marker is not None:
            if buffer:
                chunks.append("".join(buffer))
                buffer = []
            index += len(marker)
            continue

        marker = _match(text, index, after)
        if marker is not None:
            buffer.append(marker)
            chunks.append("".join(buffer))
            buffer = []
            index += len(marker)
            continue

        buffer.append(text[index])
        index += 1

    if buffer:
        chunks.append("".join(buffer))
    return chunks
