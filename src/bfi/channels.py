from __future__ import annotations

import io
from typing import BinaryIO, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class InputSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Next input byte, or None once the input is exhausted."""


@runtime_checkable
class OutputSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class BytesInput:
    def __init__(self, data: Union[bytes, bytearray, str] = b''):
        if isinstance(data, str):
            data = data.encode('utf-8')
        self.data = bytes(data)
        self.pos = 0

    def read_byte(self) -> Optional[int]:
        if self.pos >= len(self.data):
            return None
        value = self.data[self.pos]
        self.pos += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos


class StreamInput:
    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read_byte(self) -> Optional[int]:
        chunk = self.stream.read(1)
        if not chunk:
            return None
        return chunk[0]


class BufferOutput:
    def __init__(self):
        self.buffer = bytearray()

    def write_byte(self, value: int) -> None:
        self.buffer.append(value)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class StreamOutput:
    def __init__(self, stream: BinaryIO, *, flush: bool = True):
        self.stream = stream
        self.flush = flush

    def write_byte(self, value: int) -> None:
        self.stream.write(bytes((value,)))
        if self.flush:
            self.stream.flush()


def _binary(stream):
    # Text streams carry str; the tape needs bytes.
    if isinstance(stream, io.TextIOBase):
        if hasattr(stream, 'buffer'):
            return stream.buffer
        raise TypeError(f"{type(stream).__name__} is a text stream, a binary stream is needed")
    return stream


def as_input(obj) -> InputSource:
    if obj is None:
        return BytesInput()
    if isinstance(obj, (bytes, bytearray, str)):
        return BytesInput(obj)
    if isinstance(obj, InputSource):
        return obj
    if hasattr(obj, 'read'):
        return StreamInput(_binary(obj))
    raise TypeError(f"cannot read input bytes from {type(obj).__name__}")


def as_output(obj) -> OutputSink:
    if obj is None:
        return BufferOutput()
    if isinstance(obj, OutputSink):
        return obj
    if hasattr(obj, 'write'):
        return StreamOutput(_binary(obj))
    raise TypeError(f"cannot write output bytes to {type(obj).__name__}")
