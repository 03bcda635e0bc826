from dataclasses import dataclass
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
SCALE = 4294967296.0  # 2^32


def xorshift_next(state: int) -> int:
    """One step of the 13/17/5 xorshift recurrence on an unsigned 32-bit word."""
    state ^= (state << 13) & MASK32
    state ^= state >> 17
    state ^= (state << 5) & MASK32
    return state & MASK32


@dataclass
class XORShift32:
    state: int

    def __post_init__(self) -> None:
        self.state &= MASK32
        # xorshift is stuck at zero forever
        if self.state == 0:
            self.state = 1

    def next(self) -> float:
        self.state = xorshift_next(self.state)
        return self.state / SCALE

    def next_int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi)."""
        return int(self.next() * (hi - lo)) + lo

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.next_int(0, len(seq))]

    def shuffle(self, seq: MutableSequence[T]) -> MutableSequence[T]:
        # Fisher-Yates, last index down to 1
        for i in range(len(seq) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]
        return seq

    def take(self, n: int) -> List[float]:
        return [self.next() for _ in range(n)]
