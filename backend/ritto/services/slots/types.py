from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True, order=True)
class SlotCandidate:
    """A generated start time and the capacity of the window it came from."""
    start: time
    capacity: int


@dataclass(frozen=True)
class SlotAvailability:
    start: time
    capacity: int
    consumed: int

    @property
    def remaining_capacity(self) -> int:
        return self.capacity - self.consumed

    @property
    def bookable(self) -> bool:
        return self.remaining_capacity > 0
