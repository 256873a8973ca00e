from .api import RunOptions, RunResult, run_file, run_string
from .errors import (
    BFError,
    BFRuntimeError,
    ParseError,
    PointerUnderflow,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
)
from .interpreter import EofPolicy, Interpreter, run
from .parser import Instruction, Program, parse

__all__ = [
    'Instruction',
    'Program',
    'parse',
    'EofPolicy',
    'Interpreter',
    'run',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'BFError',
    'ParseError',
    'UnmatchedOpenBracket',
    'UnmatchedCloseBracket',
    'BFRuntimeError',
    'PointerUnderflow',
]
