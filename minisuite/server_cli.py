"""Command line entry point that runs the Redis-compatible server."""

from __future__ import annotations

import logging
import re
import signal
import sys
from typing import Optional, Sequence

from .redis_server import DEFAULT_PORT, RedisServer

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def parse_port(text: str) -> int:
    """Read a port number from the start of ``text``; raises ValueError if invalid."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"Invalid port number: {text}")
    port = int(match.group(1))
    if not _INT_MIN <= port <= _INT_MAX:
        raise ValueError(f"Invalid port number: {text}")
    if not 1 <= port <= 65535:
        raise ValueError("Invalid port number. Must be between 1 and 65535.")
    return port


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Serve on the port given as the first argument (default 6379) until signalled."""
    args = list(sys.argv[1:] if argv is None else argv)

    port = DEFAULT_PORT
    if args:
        try:
            port = parse_port(args[0])
        except ValueError as exc:
            print(exc, file=sys.stderr)
            return 1

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    server = RedisServer(port)

    def shut_down(signum, frame):
        print(f"\nReceived signal {signum}. Shutting down server...", flush=True)
        server.stop()

    previous = {
        sig: signal.signal(sig, shut_down) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        server.start()
    except OSError as exc:
        print(f"Failed to start server: {exc}", file=sys.stderr)
        print("Failed to start server.", file=sys.stderr)
        return 1
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0