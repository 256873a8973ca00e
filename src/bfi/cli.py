from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from .channels import StreamInput, StreamOutput
from .errors import BFError
from .interpreter import EofPolicy, Interpreter
from .logging_config import setup_logging
from .parser import parse

logger = logging.getLogger('bfi.cli')


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Run a Brainfuck program on an unbounded byte tape.",
    )
    parser.add_argument("file", nargs="?", help="program file")
    parser.add_argument("-e", "--expr", help="program text given inline")
    parser.add_argument("--input-file", help="read program input from this file instead of stdin")
    parser.add_argument(
        "--eof",
        choices=[p.value for p in EofPolicy],
        default=EofPolicy.UNCHANGED.value,
        help="cell value stored by ',' at end of input (default: unchanged)",
    )
    parser.add_argument("--dump", type=int, default=0, metavar="N", help="print the first N tape cells after the run")
    parser.add_argument("--stats", action="store_true", help="print timing and step count")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    return parser


def _dump(cells: List[int]) -> str:
    rows = []
    for i in range(0, len(cells), 8):
        rows.append(f"{i:6d}: " + " ".join(f"{v:3d}" for v in cells[i:i + 8]))
    return "\n".join(rows)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if (args.file is None) == (args.expr is None):
        parser.error("give exactly one of FILE or -e/--expr")
    if args.dump < 0:
        parser.error("--dump must not be negative")

    if args.verbose >= 2:
        setup_logging(logging.DEBUG)
    elif args.verbose == 1:
        setup_logging(logging.INFO)
    else:
        setup_logging()

    if args.expr is not None:
        code = args.expr
    else:
        try:
            with open(args.file, 'r', encoding='utf-8', errors='replace') as f:
                code = f.read()
        except OSError as e:
            print(f"Couldn't read program file: {e}", file=sys.stderr)
            return 1

    input_stream = None
    try:
        start = time.perf_counter()
        program = parse(code)
        parsed = time.perf_counter()
        logger.info("parsed %d instructions", len(program))

        if args.input_file is not None:
            input_stream = open(args.input_file, 'rb')
        source = StreamInput(input_stream if input_stream is not None else sys.stdin.buffer)
        sink = StreamOutput(sys.stdout.buffer)

        interpreter = Interpreter(program, source, sink, eof=EofPolicy(args.eof))
        try:
            interpreter.run()
        finally:
            finished = time.perf_counter()
            if args.dump:
                print(_dump(interpreter.tape.window(0, args.dump)), file=sys.stderr)
            if args.stats:
                print(f"Parsing took {(parsed - start) * 1000:.2f} ms", file=sys.stderr)
                print(f"Execution took {(finished - parsed) * 1000:.2f} ms", file=sys.stderr)
                print(f"Steps: {interpreter.steps}", file=sys.stderr)
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 1
    finally:
        if input_stream is not None:
            input_stream.close()

    logger.info("program finished after %d steps", interpreter.steps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
