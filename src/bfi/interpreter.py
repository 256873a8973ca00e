from __future__ import annotations

import enum
import logging
from typing import Optional

from .channels import InputSource, OutputSink, as_input, as_output
from .errors import make_pointer_underflow
from .parser import Instruction, Program
from .tape import DEFAULT_TAPE_SIZE, Tape

logger = logging.getLogger('bfi.interpreter')


class EofPolicy(enum.Enum):
    """What ',' stores when the input is exhausted."""

    UNCHANGED = 'unchanged'
    ZERO = 'zero'
    MAX = 'max'


class Interpreter:
    def __init__(
        self,
        program: Program,
        input_source: Optional[InputSource] = None,
        output_sink: Optional[OutputSink] = None,
        *,
        eof: EofPolicy = EofPolicy.UNCHANGED,
        tape_size: int = DEFAULT_TAPE_SIZE,
    ):
        self.program = program
        self.input = as_input(input_source)
        self.output = as_output(output_sink)
        self.eof = eof
        self.tape = Tape(tape_size)
        self.ip = 0
        self.dp = 0
        self.steps = 0

    @property
    def finished(self) -> bool:
        return self.ip >= len(self.program)

    def step(self) -> bool:
        """Retire one instruction. Returns False once the program has ended."""
        if self.ip >= len(self.program):
            return False

        ins = self.program.instructions[self.ip]
        tape = self.tape

        if ins is Instruction.MOVE_RIGHT:
            self.dp += 1
            tape.ensure(self.dp)
        elif ins is Instruction.MOVE_LEFT:
            if self.dp == 0:
                logger.warning("pointer underflow at instruction %d", self.ip)
                raise make_pointer_underflow(
                    source=self.program.source,
                    offset=self.program.offsets[self.ip],
                    ip=self.ip,
                    dp=self.dp,
                )
            self.dp -= 1
        elif ins is Instruction.INCREMENT:
            tape.increment(self.dp)
        elif ins is Instruction.DECREMENT:
            tape.decrement(self.dp)
        elif ins is Instruction.OUTPUT:
            self.output.write_byte(tape[self.dp])
        elif ins is Instruction.INPUT:
            value = self.input.read_byte()
            if value is not None:
                tape[self.dp] = value
            elif self.eof is EofPolicy.ZERO:
                tape[self.dp] = 0
            elif self.eof is EofPolicy.MAX:
                tape[self.dp] = 0xFF
        elif ins is Instruction.JUMP_IF_ZERO:
            if tape[self.dp] == 0:
                self.ip = self.program.partner(self.ip)
        elif ins is Instruction.JUMP_IF_NONZERO:
            if tape[self.dp] != 0:
                self.ip = self.program.partner(self.ip)

        self.ip += 1
        self.steps += 1
        return True

    def run(self) -> None:
        logger.debug("running %d instructions", len(self.program))
        while self.step():
            pass
        logger.debug("finished after %d steps, dp=%d", self.steps, self.dp)


def run(
    program: Program,
    input_source: Optional[InputSource] = None,
    output_sink: Optional[OutputSink] = None,
    **options,
) -> Interpreter:
    interpreter = Interpreter(program, input_source, output_sink, **options)
    interpreter.run()
    return interpreter
