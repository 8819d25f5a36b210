import os
import signal
import socket
import threading

import pytest

from minisuite.server_cli import main, parse_port


@pytest.mark.parametrize(
    "text, expected",
    [("6380", 6380), (" 42", 42), ("6380abc", 6380), ("+1", 1), ("65535", 65535)],
)
def test_parse_port_accepts_leading_number(text, expected):
    assert parse_port(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "port", "99999999999"])
def test_parse_port_rejects_non_numbers(text):
    with pytest.raises(ValueError, match="Invalid port number: "):
        parse_port(text)


@pytest.mark.parametrize("text", ["0", "-1", "65536", "70000"])
def test_parse_port_rejects_out_of_range(text):
    with pytest.raises(ValueError, match="Must be between 1 and 65535"):
        parse_port(text)


def test_main_invalid_port(capsys):
    assert main(["abc"]) == 1
    assert "Invalid port number: abc" in capsys.readouterr().err


def test_main_out_of_range_port(capsys):
    assert main(["70000"]) == 1
    assert "Must be between 1 and 65535" in capsys.readouterr().err


def test_main_port_in_use(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        assert main([str(port)]) == 1
    assert "Failed to start server." in capsys.readouterr().err


def test_main_stops_on_sigint(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("", 0))
        port = probe.getsockname()[1]

    previous = signal.getsignal(signal.SIGINT)
    timer = threading.Timer(0.5, os.kill, args=(os.getpid(), signal.SIGINT))
    timer.start()
    try:
        status = main([str(port)])
    finally:
        timer.cancel()

    assert status == 0
    assert "Shutting down server..." in capsys.readouterr().out
    assert signal.getsignal(signal.SIGINT) is previous