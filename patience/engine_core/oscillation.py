"""
Oscillation Guard - Blocks back-and-forth lane moves.

Only three-digit lane commands (source, destination, count) are tracked.
Each one is recorded before it is checked, so attempts count as well as
successes. A pattern A->B, B->A, A->B in the last three records blocks
the newest command: it is neither executed nor scored.
"""

from __future__ import annotations
from dataclasses import dataclass


HISTORY_CAPACITY = 3


@dataclass(frozen=True)
class OscillationGuard:
    """
    Stateless checker over a bounded command history.

    The history itself is owned by GameState.recent_commands.
    """
    capacity: int = HISTORY_CAPACITY

    def record(self, history: tuple[str, ...], code: str) -> tuple[str, ...]:
        """Return history with `code` appended, oldest entries evicted."""
        return (*history, code)[-self.capacity:]

    def is_oscillating(self, history: tuple[str, ...]) -> bool:
        if len(history) < self.capacity:
            return False
        first, second, third = history[-3:]
        return first == third and second == first[::-1]

    def check(self, history: tuple[str, ...], code: str) -> tuple[tuple[str, ...], bool]:
        """Record `code` and report whether the resulting history oscillates."""
        new_history = self.record(history, code)
        return new_history, self.is_oscillating(new_history)
