"""Parsing and serializing the Redis serialization protocol (RESP)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

_INT_PREFIX = re.compile(rb"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_LLONG_MIN = -(2**63)
_LLONG_MAX = 2**63 - 1
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ProtocolError(ValueError):
    """Raised when data is not a well-formed RESP value."""


@dataclass
class SimpleString:
    """``+value\\r\\n``"""

    value: str


@dataclass
class ErrorReply:
    """``-message\\r\\n``"""

    message: str


@dataclass
class Integer:
    """``:value\\r\\n``"""

    value: int


@dataclass
class BulkString:
    """``$len\\r\\nvalue\\r\\n``, or ``$-1\\r\\n`` when value is None."""

    value: Optional[str] = None

    @property
    def is_null(self) -> bool:
        return self.value is None


@dataclass
class Array:
    """``*count\\r\\n`` followed by its elements, or ``*-1\\r\\n`` when null."""

    elements: List["RespValue"] = field(default_factory=list)
    is_null: bool = False


RespValue = Union[SimpleString, ErrorReply, Integer, BulkString, Array]


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def _decode(data: bytes) -> str:
    return data.decode(_ENCODING, _ERRORS)


def _read_line(data: bytes, pos: int) -> Tuple[bytes, int]:
    end = data.find(b"\r", pos)
    if end < 0 or data[end + 1:end + 2] != b"\n":
        raise ProtocolError("Line is not terminated by CRLF")
    return data[pos:end], end + 2


def _to_int(text: bytes) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ProtocolError(f"Invalid integer: {text!r}")
    number = int(match.group(1))
    if not _LLONG_MIN <= number <= _LLONG_MAX:
        raise ProtocolError(f"Integer out of range: {text!r}")
    return number


def _parse_value(data: bytes, pos: int) -> Tuple[RespValue, int]:
    if pos >= len(data):
        raise ProtocolError("Unexpected end of data")
    prefix = data[pos:pos + 1]
    line, pos = _read_line(data, pos + 1)

    if prefix == b"+":
        return SimpleString(_decode(line)), pos
    if prefix == b"-":
        return ErrorReply(_decode(line)), pos
    if prefix == b":":
        return Integer(_to_int(line)), pos
    if prefix == b"$":
        length = _to_int(line)
        if length == -1:
            return BulkString(None), pos
        if length < 0:
            raise ProtocolError(f"Invalid bulk string length: {length}")
        if len(data) - pos < length + 2:
            raise ProtocolError("Not enough data for bulk string")
        return BulkString(_decode(data[pos:pos + length])), pos + length + 2
    if prefix == b"*":
        length = _to_int(line)
        if length == -1:
            return Array(is_null=True), pos
        elements: List[RespValue] = []
        for _ in range(length):
            element, pos = _parse_value(data, pos)
            elements.append(element)
        return Array(elements), pos
    raise ProtocolError(f"Unknown RESP type prefix: {prefix!r}")


def parse(data: Union[bytes, str]) -> RespValue:
    """Parse the first RESP value in ``data``; raises ProtocolError if malformed."""
    if isinstance(data, str):
        data = _encode(data)
    if not data:
        raise ProtocolError("Empty data")
    value, _ = _parse_value(data, 0)
    return value


def serialize(value: RespValue) -> bytes:
    """The RESP encoding of ``value``."""
    if isinstance(value, SimpleString):
        return b"+" + _encode(value.value) + b"\r\n"
    if isinstance(value, ErrorReply):
        return b"-" + _encode(value.message) + b"\r\n"
    if isinstance(value, Integer):
        return b":%d\r\n" % value.value
    if isinstance(value, BulkString):
        if value.value is None:
            return b"$-1\r\n"
        payload = _encode(value.value)
        return b"$%d\r\n" % len(payload) + payload + b"\r\n"
    if isinstance(value, Array):
        if value.is_null:
            return b"*-1\r\n"
        return b"*%d\r\n" % len(value.elements) + b"".join(
            serialize(element) for element in value.elements
        )
    raise TypeError(f"Not a RESP value: {value!r}")