"""A client for the Redis-compatible server that keeps one connection open."""

from __future__ import annotations

import logging
import re
import socket
from typing import BinaryIO, Optional, Union

from .protocol import (
    Array,
    BulkString,
    Integer,
    ProtocolError,
    RespValue,
    SimpleString,
    parse,
    serialize,
)

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(rb"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class ClientError(Exception):
    """Raised when the client cannot connect, send, receive or parse a reply."""


class RedisClient:
    """Sends commands to a server over a persistent TCP connection.

    Every network operation gives up after ``timeout`` seconds.
    """

    def __init__(self, timeout: float = 30) -> None:
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None
        self._reader: Optional[BinaryIO] = None

    @property
    def connected(self) -> bool:
        """Whether a connection is open."""
        return self._sock is not None

    def connect(self, host: str, port: int) -> None:
        """Connect to the server at IPv4 address ``host``; raises ClientError on failure."""
        self.disconnect()
        try:
            socket.inet_pton(socket.AF_INET, host)
        except OSError as exc:
            raise ClientError(f"Invalid address/ Address not supported: {host}") from exc

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.timeout)
            sock.connect((host, port))
        except (OSError, OverflowError) as exc:
            sock.close()
            raise ClientError(f"Connection failed: {exc}") from exc

        self._sock = sock
        self._reader = sock.makefile("rb")
        logger.info("Connected to Redis server %s:%d", host, port)

    def disconnect(self) -> None:
        """Close the connection if one is open."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send_command(self, command: Union[bytes, str]) -> RespValue:
        """Send an already RESP-encoded command and return the parsed reply."""
        if self._sock is None:
            raise ClientError("Not connected to a server.")
        if isinstance(command, str):
            command = command.encode("utf-8")
        try:
            self._sock.sendall(command)
        except OSError as exc:
            raise ClientError(f"Failed to send command: {exc}") from exc

        raw = self._receive_value()
        try:
            return parse(raw)
        except ProtocolError as exc:
            raise ClientError(f"Malformed response: {exc}") from exc

    def set(self, key: str, value: str) -> bool:
        """SET ``key`` to ``value``; True if the server answered OK."""
        reply = self.send_command(self._command("SET", key, value))
        return isinstance(reply, SimpleString) and reply.value == "OK"

    def get(self, key: str) -> Optional[str]:
        """GET ``key``; None when the key does not exist."""
        reply = self.send_command(self._command("GET", key))
        if isinstance(reply, BulkString):
            return reply.value
        return None

    def delete(self, key: str) -> bool:
        """DEL ``key``; True if a key was removed."""
        reply = self.send_command(self._command("DEL", key))
        return isinstance(reply, Integer) and reply.value > 0

    def ping(self) -> bool:
        """PING the server; True if it answered PONG."""
        reply = self.send_command(self._command("PING"))
        return isinstance(reply, SimpleString) and reply.value == "PONG"

    def exists(self, key: str) -> bool:
        """EXISTS ``key``; True if the key is present."""
        reply = self.send_command(self._command("EXISTS", key))
        return isinstance(reply, Integer) and reply.value > 0

    def __enter__(self) -> "RedisClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @staticmethod
    def _command(*parts: str) -> bytes:
        return serialize(Array([BulkString(part) for part in parts]))

    def _receive_value(self) -> bytes:
        prefix = self._read_exact(1)
        if prefix in (b"+", b"-", b":"):
            return prefix + self._read_line()
        if prefix in (b"$", b"*"):
            line = self._read_line()
            length = self._length(line)
            if length == -1:
                return prefix + line
            if prefix == b"$":
                return prefix + line + self._read_exact(max(length + 2, 0))
            elements = b"".join(self._receive_value() for _ in range(length))
            return prefix + line + elements
        raise ClientError(f"Unknown RESP type: {prefix!r}")

    @staticmethod
    def _length(line: bytes) -> int:
        match = _INT_PREFIX.match(line)
        if match is None:
            raise ClientError(f"Invalid length: {line!r}")
        return int(match.group(1))

    def _read_exact(self, size: int) -> bytes:
        assert self._reader is not None
        try:
            data = self._reader.read(size)
        except socket.timeout as exc:
            raise ClientError("Timeout while receiving data") from exc
        except OSError as exc:
            raise ClientError(f"Error receiving data: {exc}") from exc
        if data is None or len(data) < size:
            raise ClientError("Connection closed by server")
        return data

    def _read_line(self) -> bytes:
        assert self._reader is not None
        line = b""
        while not line.endswith(b"\r\n"):
            try:
                chunk = self._reader.readline()
            except socket.timeout as exc:
                raise ClientError("Timeout while receiving data") from exc
            except OSError as exc:
                raise ClientError(f"Error receiving data: {exc}") from exc
            if not chunk:
                raise ClientError("Connection closed by server")
            line += chunk
        return line