from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _locate(source: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of a character offset."""
    line = source.count('\n', 0, offset) + 1
    line_start = source.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'open':
        return 'Every "[" needs a matching "]" later in the program.'
    if kind == 'close':
        return 'This "]" has no "[" before it. Remove it or add the missing "[".'
    if kind == 'underflow':
        return 'The tape starts at cell 0 and cannot be moved further left. Check the "<" count.'
    return None


def _render(message: str, source: str, offset: int, kind: str) -> Tuple[str, int, int, str]:
    line, column = _locate(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return f"{message} (line {line}, column {column})\n{ctx}{hint_block}", line, column, ctx


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ParseError(BFError):
    offset: int
    line: int
    column: int
    context: str


@dataclass
class UnmatchedOpenBracket(ParseError):
    offsets: Tuple[int, ...] = ()


@dataclass
class UnmatchedCloseBracket(ParseError):
    pass


@dataclass
class BFRuntimeError(BFError):
    ip: int
    dp: int
    offset: int
    line: int
    column: int
    context: str


@dataclass
class PointerUnderflow(BFRuntimeError):
    pass


def make_unmatched_open(*, source: str, offsets: Tuple[int, ...]) -> UnmatchedOpenBracket:
    # Point at the innermost unclosed bracket; list all of them in the message.
    where = ', '.join(str(o) for o in offsets)
    noun = "'['" if len(offsets) == 1 else "'['s"
    message, line, column, ctx = _render(
        f"ParseError: unmatched {noun} at offset {where}", source, offsets[-1], 'open'
    )
    return UnmatchedOpenBracket(
        message=message, offset=offsets[-1], line=line, column=column, context=ctx, offsets=offsets,
    )


def make_unmatched_close(*, source: str, offset: int) -> UnmatchedCloseBracket:
    message, line, column, ctx = _render(
        f"ParseError: unmatched ']' at offset {offset}", source, offset, 'close'
    )
    return UnmatchedCloseBracket(message=message, offset=offset, line=line, column=column, context=ctx)


def make_pointer_underflow(*, source: str, offset: int, ip: int, dp: int) -> PointerUnderflow:
    message, line, column, ctx = _render(
        f"RuntimeError: data pointer moved left of cell 0 at instruction {ip}", source, offset, 'underflow'
    )
    return PointerUnderflow(
        message=message, ip=ip, dp=dp, offset=offset, line=line, column=column, context=ctx,
    )
