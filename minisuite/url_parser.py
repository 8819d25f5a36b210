"""Splitting URLs into protocol, host, port, path, query and fragment."""

from __future__ import annotations

import re
from dataclasses import dataclass

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class UrlError(ValueError):
    """Raised when a URL cannot be parsed."""


@dataclass(frozen=True)
class ParsedUrl:
    """The components of a parsed URL."""

    protocol: str
    host: str
    port: int
    path: str
    query: str = ""
    fragment: str = ""


def _parse_port(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise UrlError(f"Invalid port: {text!r}")
    port = int(match.group(1))
    if not _INT_MIN <= port <= _INT_MAX:
        raise UrlError(f"Port out of range: {text!r}")
    return port


def _find(text: str, sub: str, start: int) -> int | None:
    pos = text.find(sub, start)
    return None if pos < 0 else pos


def parse_url(url: str) -> ParsedUrl:
    """Parse ``url``; a missing scheme means http. Raises UrlError if invalid."""
    if not url:
        raise UrlError("Empty URL")

    protocol_end = _find(url, "://", 0)
    if protocol_end is not None:
        protocol = url[:protocol_end].lower()
        pos = protocol_end + 3
    else:
        protocol = "http"
        pos = 0

    port = 443 if protocol == "https" else 80

    host_end = _find(url, "/", pos)
    port_pos = _find(url, ":", pos)

    if port_pos is not None and (host_end is None or port_pos < host_end):
        host = url[pos:port_pos]
        port_text = url[port_pos + 1:host_end] if host_end is not None else url[port_pos + 1:]
        port = _parse_port(port_text)
    else:
        host = url[pos:host_end] if host_end is not None else url[pos:]

    if not host:
        raise UrlError(f"Missing host in URL: {url!r}")

    pos = host_end if host_end is not None else len(url)

    query_pos = _find(url, "?", pos)
    fragment_pos = _find(url, "#", pos)

    if query_pos is not None:
        path = url[pos:query_pos]
    elif fragment_pos is not None:
        path = url[pos:fragment_pos]
    else:
        path = url[pos:]
    path = path or "/"

    query = ""
    if query_pos is not None:
        if fragment_pos is not None and fragment_pos > query_pos:
            query = url[query_pos + 1:fragment_pos]
        else:
            query = url[query_pos + 1:]

    fragment = url[fragment_pos + 1:] if fragment_pos is not None else ""

    return ParsedUrl(protocol, host, port, path, query, fragment)