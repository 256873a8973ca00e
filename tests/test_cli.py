#!/usr/bin/env python3
"""
Tests for the command line entry point.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfi.cli import main


@pytest.fixture
def stdin(monkeypatch):
    def feed(data=b""):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    feed()
    return feed


def test_inline_program(stdin, capsysbinary):
    assert main(["-e", "+++."]) == 0
    assert capsysbinary.readouterr().out == b"\x03"


def test_program_file_and_stdin(tmp_path, stdin, capsysbinary):
    path = tmp_path / "cat.bf"
    path.write_text("+[,.]", encoding="utf-8")
    stdin(b"abc\x00")
    assert main([str(path)]) == 0
    assert capsysbinary.readouterr().out == b"abc\x00"


def test_input_file(tmp_path, stdin, capsysbinary):
    data = tmp_path / "in.bin"
    data.write_bytes(b"\x05")
    assert main(["-e", ",.", "--input-file", str(data)]) == 0
    assert capsysbinary.readouterr().out == b"\x05"


def test_empty_program_exits_zero(stdin, capsysbinary):
    assert main(["-e", ""]) == 0
    assert capsysbinary.readouterr().out == b""


def test_parse_error_exits_nonzero(stdin, capsysbinary):
    assert main(["-e", "+[["]) == 1
    captured = capsysbinary.readouterr()
    assert captured.out == b""
    assert b"unmatched '['s" in captured.err


def test_underflow_exits_nonzero_keeping_output(stdin, capsysbinary):
    assert main(["-e", "+.<"]) == 1
    captured = capsysbinary.readouterr()
    assert captured.out == b"\x01"
    assert b"left of cell 0" in captured.err


def test_missing_program_file(tmp_path, stdin, capsysbinary):
    assert main([str(tmp_path / "nope.bf")]) == 1
    assert b"Couldn't read program file" in capsysbinary.readouterr().err


def test_eof_option(stdin, capsysbinary):
    stdin(b"hi")
    assert main(["-e", ",[.,]", "--eof", "zero"]) == 0
    assert capsysbinary.readouterr().out == b"hi"


def test_dump(stdin, capsysbinary):
    assert main(["-e", "+>++", "--dump", "4"]) == 0
    err = capsysbinary.readouterr().err
    assert b"     0:   1   2   0   0" in err


def test_stats(stdin, capsysbinary):
    assert main(["-e", "+++", "--stats"]) == 0
    err = capsysbinary.readouterr().err
    assert b"Execution took" in err
    assert b"Steps: 3" in err


@pytest.mark.parametrize("argv", [[], ["prog.bf", "-e", "+"]])
def test_needs_exactly_one_program(argv, stdin):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2


def test_non_utf8_comment_in_program_file(tmp_path, stdin, capsysbinary):
    path = tmp_path / "latin1.bf"
    path.write_bytes(b"caf\xe9 +++.")
    assert main([str(path)]) == 0
    assert capsysbinary.readouterr().out == b"\x03"


class _BrokenPipe:
    def write(self, data):
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self):
        pass


class _BrokenStdout:
    buffer = _BrokenPipe()


def test_output_failure_exits_nonzero(stdin, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdout", _BrokenStdout())
    assert main(["-e", "+."]) == 1
    assert "I/O error" in capsys.readouterr().err


def test_very_verbose_logs_debug(stdin, capsys):
    assert main(["-vv", "-e", "+"]) == 0
    err = capsys.readouterr().err
    assert "DEBUG bfi.interpreter: running 1 instructions" in err
    assert "DEBUG bfi.interpreter: finished after 1 steps" in err
