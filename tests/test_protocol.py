import pytest

from minisuite.protocol import (
    Array,
    BulkString,
    ErrorReply,
    Integer,
    ProtocolError,
    SimpleString,
    parse,
    serialize,
)


def test_simple_string_wire():
    assert serialize(SimpleString("OK")) == b"+OK\r\n"
    assert parse(b"+OK\r\n") == SimpleString("OK")


def test_integer_wire():
    assert serialize(Integer(1000)) == b":1000\r\n"
    assert parse(b":1000\r\n") == Integer(1000)


def test_null_bulk_string_wire():
    assert serialize(BulkString()) == b"$-1\r\n"
    parsed = parse(b"$-1\r\n")
    assert parsed.is_null


def test_bulk_string_wire():
    assert serialize(BulkString("hello")) == b"$5\r\nhello\r\n"


def test_array_wire():
    wire = b"*2\r\n$5\r\nhello\r\n$5\r\nworld\r\n"
    value = Array([BulkString("hello"), BulkString("world")])
    assert serialize(value) == wire
    assert parse(wire) == value


def test_null_array():
    assert serialize(Array(is_null=True)) == b"*-1\r\n"
    assert parse(b"*-1\r\n").is_null


@pytest.mark.parametrize(
    "value",
    [
        SimpleString("PONG"),
        ErrorReply("ERR Unknown command 'FOO'"),
        Integer(-42),
        BulkString(""),
        BulkString("line\r\nbreak"),
        BulkString("héllo"),
        Array([]),
        Array([Integer(1), Array([SimpleString("a"), BulkString(None)])]),
    ],
)
def test_round_trip(value):
    assert parse(serialize(value)) == value


def test_bulk_length_counts_bytes():
    wire = serialize(BulkString("é"))
    assert wire.startswith(b"$2\r\n")


def test_parse_accepts_str():
    assert parse("+OK\r\n") == SimpleString("OK")


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"?what\r\n",
        b"+OK",
        b"+OK\r",
        b":abc\r\n",
        b"$5\r\nhi\r\n",
        b"*2\r\n$1\r\na\r\n",
        b":99999999999999999999\r\n",
    ],
)
def test_malformed_raises(data):
    with pytest.raises(ProtocolError):
        parse(data)


def test_error_reply_parsed():
    assert parse(b"-ERR Empty command\r\n") == ErrorReply("ERR Empty command")


def test_serialize_rejects_other_types():
    with pytest.raises(TypeError):
        serialize("plain")