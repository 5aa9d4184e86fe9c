"""
Delay policies for human-like typing.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Optional

from presenter.config import PlaybackConfig


@dataclass(frozen=True)
class DelayPolicy:
    """
    Per-character typing delay.

    Each pause is drawn uniformly from ``[base - jitter, base + jitter]``
    milliseconds. An unpaced policy types without pausing at all.
    """
    base: int
    jitter: int = 0
    paced: bool = True

    @classmethod
    def for_instruction(cls, delay: Optional[int], config: PlaybackConfig) -> DelayPolicy:
        """
        Build the policy for an instruction's ``delay`` setting.

        A delay of exactly 0 disables pacing; None falls back to the
        configured default. Jitter never exceeds the base delay.
        """
        base = delay or config.delay
        return cls(base=base, jitter=min(base, config.randomness), paced=delay != 0)

    def draw(self, rng: random.Random) -> float:
        """Draw one pause, in seconds."""
        offset = rng.randint(-self.jitter, self.jitter) if self.jitter > 0 else 0
        return max(0, self.base + offset) / 1000
