"""Command line client for the Redis-compatible server."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .redis_client import ClientError, RedisClient
from .server_cli import parse_port

PROG = "redis_client"
PROMPT = "redis> "
SUPPORTED = "Supported commands: PING, SET, GET, DEL, EXISTS, QUIT"


def execute_command(client: RedisClient, args: Sequence[str]) -> bool:
    """Run one command; False means it failed or the user asked to quit."""
    if not args:
        return True

    command, *rest = args

    if command == "PING":
        try:
            result = client.ping()
        except ClientError:
            result = False
        if result:
            print("PONG")
        else:
            print("PING failed.", file=sys.stderr)
        return result

    if command == "SET" and len(rest) == 2:
        try:
            result = client.set(rest[0], rest[1])
        except ClientError:
            result = False
        if result:
            print("OK")
        else:
            print("SET failed.", file=sys.stderr)
        return result

    if command == "GET" and len(rest) == 1:
        try:
            value = client.get(rest[0])
        except ClientError:
            value = None
        print("(nil)" if value is None else f'"{value}"')
        return True

    if command in ("DEL", "EXISTS") and len(rest) == 1:
        action = client.delete if command == "DEL" else client.exists
        try:
            result = action(rest[0])
        except ClientError:
            result = False
        print(f"(integer) {1 if result else 0}")
        return True

    if command == "QUIT":
        print("Goodbye!")
        return False

    print("Invalid command or arguments.", file=sys.stderr)
    print(SUPPORTED, file=sys.stderr)
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to HOST PORT and run one command, or read commands interactively."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(f"Usage: {PROG} [HOST] [PORT] [COMMAND] [ARGS...]", file=sys.stderr)
        print("Examples:", file=sys.stderr)
        print(f"  {PROG} 127.0.0.1 6379", file=sys.stderr)
        print(f"  {PROG} 127.0.0.1 6379 PING", file=sys.stderr)
        return 1

    host = args[0]
    try:
        port = parse_port(args[1])
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    client = RedisClient()
    try:
        client.connect(host, port)
    except ClientError as exc:
        print(exc, file=sys.stderr)
        print("Failed to connect to server.", file=sys.stderr)
        return 1
    print(f"Connected to Redis server {host}:{port}")

    with client:
        if len(args) > 2:
            success = execute_command(client, args[2:])
            client.disconnect()
            print("Disconnected from Redis server.")
            return 0 if success else 1

        print(f"Connected to Redis server at {host}:{port}")
        print("Type 'QUIT' to exit.")
        while True:
            print(PROMPT, end="", flush=True)
            line = sys.stdin.readline()
            if not line:
                break
            if not execute_command(client, line.split()):
                break

    print("Disconnected from Redis server.")
    return 0