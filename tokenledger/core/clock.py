"""
Deterministic logical clock.

Transaction validity windows are measured against the logical time the host
attaches to each inbound message, never against wall-clock time.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeterministicClock:
    """
    Deterministic time source.

    In production: the host provides the message timestamp.
    In tests and scripts: advance manually with tick() or jump with at().
    """
    current: int = 0

    def now(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self, step: int = 1) -> "DeterministicClock":
        """
        Advance clock by step and return new clock instance.

        Since DeterministicClock is immutable, this returns a new instance.
        """
        if step < 0:
            raise ValueError("clock cannot move backwards")
        return DeterministicClock(self.current + step)

    def at(self, ts: int) -> "DeterministicClock":
        """Return a clock positioned at ts (must not be earlier than now)."""
        if ts < self.current:
            raise ValueError(f"clock cannot move backwards: {ts} < {self.current}")
        return DeterministicClock(ts)
