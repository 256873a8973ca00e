from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .channels import BufferOutput, as_input
from .interpreter import EofPolicy, Interpreter
from .parser import parse
from .tape import DEFAULT_TAPE_SIZE


@dataclass(frozen=True)
class RunOptions:
    eof: EofPolicy = EofPolicy.UNCHANGED
    tape_size: int = DEFAULT_TAPE_SIZE


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    dp: int
    cells: List[int]


def run_string(source: str, data: Union[bytes, str] = b'', *, options: Optional[RunOptions] = None) -> RunResult:
    opts = RunOptions() if options is None else options
    program = parse(source)
    sink = BufferOutput()
    interpreter = Interpreter(program, as_input(data), sink, eof=opts.eof, tape_size=opts.tape_size)
    interpreter.run()
    return RunResult(
        output=sink.getvalue(),
        steps=interpreter.steps,
        dp=interpreter.dp,
        cells=interpreter.tape.used(),
    )


def run_file(
    path: str | Path,
    data: Union[bytes, str] = b'',
    *,
    options: Optional[RunOptions] = None,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding, errors=errors), data, options=options)
