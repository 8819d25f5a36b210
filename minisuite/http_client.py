"""A minimal HTTP/1.1 GET client over plain sockets."""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass, field

from .url_parser import UrlError, parse_url

_INT_PREFIX = re.compile(r"[+-]?[0-9]+")
_CHUNK = 4096


class HttpError(Exception):
    """Raised when a request fails or a response is malformed."""


@dataclass
class HttpResponse:
    """A parsed HTTP response; header names are lower case."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def _parse_status(status_line: str) -> int:
    parts = status_line.split()
    if len(parts) < 2:
        return 0
    match = _INT_PREFIX.match(parts[1])
    return int(match.group()) if match else 0


def parse_response(data: bytes) -> HttpResponse:
    """Parse raw response bytes; raises HttpError if the header block is unterminated."""
    header_end = data.find(b"\r\n\r\n")
    if header_end < 0:
        raise HttpError("Invalid HTTP response format")

    head = data[:header_end].decode("latin-1")
    status_line, *header_lines = head.split("\n")

    headers: dict[str, str] = {}
    for line in header_lines:
        line = line.removesuffix("\r")
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        headers[name.strip(" \t").lower()] = value.strip(" \t")

    return HttpResponse(_parse_status(status_line), headers, data[header_end + 4:])


class HttpClient:
    """Sends GET requests to plain-http URLs."""

    def __init__(self, timeout: float = 30) -> None:
        self.timeout = timeout

    def get(self, url: str) -> HttpResponse:
        """Fetch ``url``; raises HttpError on any failure."""
        try:
            parsed = parse_url(url)
        except UrlError as exc:
            raise HttpError(f"Invalid URL: {url}") from exc

        if parsed.protocol != "http":
            raise HttpError("Only HTTP protocol is supported")

        target = parsed.path + (f"?{parsed.query}" if parsed.query else "")
        request = (
            f"GET {target} HTTP/1.1\r\n"
            f"Host: {parsed.host}\r\n"
            "Connection: close\r\n"
            "\r\n"
        ).encode("latin-1")

        try:
            address = socket.gethostbyname(parsed.host)
        except OSError as exc:
            raise HttpError(f"Failed to resolve hostname: {parsed.host}") from exc

        chunks = []
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect((address, parsed.port))
                sock.sendall(request)
                while chunk := sock.recv(_CHUNK):
                    chunks.append(chunk)
        except socket.timeout as exc:
            raise HttpError("Timeout while receiving response") from exc
        except OSError as exc:
            raise HttpError(f"Request to {url} failed: {exc}") from exc

        return parse_response(b"".join(chunks))