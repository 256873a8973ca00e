from __future__ import annotations

from typing import List

import numpy as np

DEFAULT_TAPE_SIZE = 30000


class Tape:
    """Byte cells indexed from 0, zero until written, growing to the right."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError(f"tape size must be positive, got {size}")
        self.cells = np.zeros(size, dtype=np.uint8)
        self.high_water = 0

    def __len__(self) -> int:
        return len(self.cells)

    def ensure(self, index: int) -> None:
        if index < 0:
            raise IndexError(f"tape index {index} is left of cell 0")
        if index > self.high_water:
            self.high_water = index
        size = len(self.cells)
        if index < size:
            return
        while size <= index:
            size *= 2
        grown = np.zeros(size, dtype=np.uint8)
        grown[:len(self.cells)] = self.cells
        self.cells = grown

    def __getitem__(self, index: int) -> int:
        if index < 0:
            raise IndexError(f"tape index {index} is left of cell 0")
        if index >= len(self.cells):
            return 0
        return int(self.cells[index])

    def __setitem__(self, index: int, value: int) -> None:
        self.ensure(index)
        self.cells[index] = value & 0xFF

    def increment(self, index: int) -> None:
        # int() first: numpy uint8 arithmetic would warn on overflow
        self[index] = int(self.cells[index]) + 1 if index < len(self.cells) else 1

    def decrement(self, index: int) -> None:
        self[index] = int(self.cells[index]) - 1 if index < len(self.cells) else -1

    def window(self, start: int, count: int) -> List[int]:
        return [self[i] for i in range(start, start + count)]

    def used(self) -> List[int]:
        """Cells from 0 up to the highest index ever touched."""
        return [int(v) for v in self.cells[:self.high_water + 1]]
