"""A small Redis-compatible server backed by an in-memory store."""

from __future__ import annotations

import logging
import select
import socket
import string
import threading
import time
from typing import Optional, Tuple

from .kv_store import KVStore
from .protocol import (
    Array,
    BulkString,
    ErrorReply,
    Integer,
    ProtocolError,
    RespValue,
    SimpleString,
    parse,
    serialize,
)
from .thread_pool import ThreadPool

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6379
# How often the serving loops wake up to notice a stop request, in seconds.
POLL_INTERVAL = 1.0
BUFFER_SIZE = 1024
BACKLOG = 10

INVALID_FORMAT = "ERR Invalid command format"

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class RedisServer:
    """Accepts clients and answers PING, SET, GET, DEL and EXISTS.

    Each client connection is handled on a thread pool. A client that sends
    nothing for ``timeout`` seconds is disconnected.
    """

    def __init__(
        self, port: int = DEFAULT_PORT, num_threads: int = 4, timeout: float = 30
    ) -> None:
        self.port = port
        self.timeout = timeout
        self.store = KVStore()
        self._pool = ThreadPool(num_threads)
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._sock: Optional[socket.socket] = None

    def start(self) -> None:
        """Listen on all interfaces and serve until stop() is called.

        Raises OSError if the listening socket cannot be set up.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", self.port))
            sock.listen(BACKLOG)
        except OSError:
            sock.close()
            raise

        with self._lock:
            self._sock = sock
        logger.info("Redis server listening on port %d", sock.getsockname()[1])

        try:
            self._serve(sock)
        finally:
            with self._lock:
                self._sock = None
            sock.close()
            self._pool.shutdown()
        logger.info("Server has stopped.")

    def stop(self) -> None:
        """Ask the server to stop; the serving loops notice within a poll interval."""
        self._stopped.set()

    def address(self) -> Tuple[str, int]:
        """The (host, port) the server listens on; RuntimeError if it is not listening."""
        with self._lock:
            if self._sock is None:
                raise RuntimeError("Server is not listening")
            host, port = self._sock.getsockname()[:2]
        return host, port

    def execute_command(self, command: Array) -> RespValue:
        """Run one command given as an array of bulk strings and return the reply."""
        elements = command.elements
        if not elements:
            return ErrorReply("ERR Empty command")

        head = elements[0]
        if not isinstance(head, BulkString):
            return ErrorReply(INVALID_FORMAT)
        if head.value is None:
            return ErrorReply("ERR Invalid command name")

        name = head.value.translate(_ASCII_UPPER)
        args = elements[1:]

        if name == "PING":
            return SimpleString("PONG")

        if name == "SET" and len(args) == 2:
            key, value = args
            if not isinstance(key, BulkString) or not isinstance(value, BulkString):
                return ErrorReply("ERR Invalid SET command format")
            if key.value is None or value.value is None:
                return ErrorReply("ERR Invalid key or value")
            self.store.set(key.value, value.value)
            return SimpleString("OK")

        if name in ("GET", "DEL", "EXISTS") and len(args) == 1:
            key = args[0]
            if not isinstance(key, BulkString):
                return ErrorReply(f"ERR Invalid {name} command format")
            if key.value is None:
                return ErrorReply("ERR Invalid key")
            if name == "GET":
                return BulkString(self.store.get(key.value))
            if name == "DEL":
                return Integer(1 if self.store.delete(key.value) else 0)
            return Integer(1 if self.store.exists(key.value) else 0)

        return ErrorReply(f"ERR Unknown command '{head.value}'")

    def _serve(self, sock: socket.socket) -> None:
        while not self._stopped.is_set():
            try:
                readable, _, _ = select.select([sock], [], [], POLL_INTERVAL)
            except OSError as exc:
                if not self._stopped.is_set():
                    logger.error("Error in select: %s", exc)
                continue
            if not readable:
                continue

            try:
                conn, peer = sock.accept()
            except OSError as exc:
                if not self._stopped.is_set():
                    logger.error("Failed to accept connection: %s", exc)
                continue

            logger.info("Accepted connection from %s:%d", peer[0], peer[1])
            self._pool.enqueue(lambda conn=conn: self._handle_client(conn))

    def _handle_client(self, conn: socket.socket) -> None:
        with conn:
            self._process_commands(conn)
        logger.info("Client connection closed.")

    def _process_commands(self, conn: socket.socket) -> None:
        while not self._stopped.is_set():
            if not self._wait_readable(conn):
                break
            try:
                chunk = conn.recv(BUFFER_SIZE - 1)
            except OSError as exc:
                logger.error("Error receiving data: %s", exc)
                break
            if not chunk:
                break

            data = chunk.split(b"\0", 1)[0]
            try:
                conn.sendall(serialize(self._respond(data)))
            except OSError as exc:
                logger.error("Error sending response: %s", exc)
                break

    def _wait_readable(self, conn: socket.socket) -> bool:
        deadline = time.monotonic() + self.timeout
        while not self._stopped.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("Timeout while receiving data from client")
                return False
            try:
                readable, _, _ = select.select(
                    [conn], [], [], min(POLL_INTERVAL, remaining)
                )
            except (OSError, ValueError) as exc:
                logger.error("Error in select: %s", exc)
                return False
            if readable:
                return True
        return False

    def _respond(self, data: bytes) -> RespValue:
        try:
            value = parse(data)
        except ProtocolError:
            return ErrorReply(INVALID_FORMAT)
        if not isinstance(value, Array):
            return ErrorReply(INVALID_FORMAT)
        return self.execute_command(value)