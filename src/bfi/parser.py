from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .errors import make_unmatched_close, make_unmatched_open


class Instruction(enum.Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    JUMP_IF_ZERO = '['
    JUMP_IF_NONZERO = ']'


_SYMBOLS = {ins.value: ins for ins in Instruction}


@dataclass(frozen=True, eq=False)
class Program:
    """A parsed program.

    ``jump_table[i]`` is the partner of the bracket at ``i`` and ``i`` itself
    for every other instruction. ``offsets[i]`` is where instruction ``i``
    sits in ``source``.
    """

    instructions: Tuple[Instruction, ...]
    jump_table: np.ndarray
    offsets: Tuple[int, ...]
    source: str = ''

    def __len__(self) -> int:
        return len(self.instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return (
            self.instructions == other.instructions
            and self.offsets == other.offsets
            and np.array_equal(self.jump_table, other.jump_table)
        )

    def to_source(self) -> str:
        return ''.join(ins.value for ins in self.instructions)

    def partner(self, index: int) -> int:
        return int(self.jump_table[index])


def parse(source: str) -> Program:
    instructions: List[Instruction] = []
    offsets: List[int] = []
    pairs: List[Tuple[int, int]] = []
    stack: List[int] = []

    for pos, ch in enumerate(source):
        ins = _SYMBOLS.get(ch)
        if ins is None:
            continue
        index = len(instructions)
        if ins is Instruction.JUMP_IF_ZERO:
            stack.append(index)
        elif ins is Instruction.JUMP_IF_NONZERO:
            if not stack:
                raise make_unmatched_close(source=source, offset=pos)
            pairs.append((stack.pop(), index))
        instructions.append(ins)
        offsets.append(pos)

    if stack:
        raise make_unmatched_open(source=source, offsets=tuple(offsets[i] for i in stack))

    # Same layout as the runner's bracket map: identity for non-brackets.
    jump_table = np.arange(len(instructions), dtype=np.int32)
    for start, end in pairs:
        jump_table[start] = end
        jump_table[end] = start
    jump_table.setflags(write=False)

    return Program(
        instructions=tuple(instructions),
        jump_table=jump_table,
        offsets=tuple(offsets),
        source=source,
    )
