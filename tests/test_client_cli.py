import io
import socket
import threading
import time

import pytest

from minisuite.client_cli import execute_command, main
from minisuite.redis_client import ClientError
from minisuite.redis_server import RedisServer


class StubClient:
    def __init__(self, ping=True, set_ok=True, values=None, fail=False):
        self._ping = ping
        self._set_ok = set_ok
        self.values = dict(values or {})
        self._fail = fail

    def _check(self):
        if self._fail:
            raise ClientError("broken")

    def ping(self):
        self._check()
        return self._ping

    def set(self, key, value):
        self._check()
        if self._set_ok:
            self.values[key] = value
        return self._set_ok

    def get(self, key):
        self._check()
        return self.values.get(key)

    def delete(self, key):
        self._check()
        return self.values.pop(key, None) is not None

    def exists(self, key):
        self._check()
        return key in self.values


@pytest.fixture(scope="module")
def server_port():
    server = RedisServer(0, 2, 5)
    thread = threading.Thread(target=server.start, daemon=True)
    thread.start()
    deadline = time.monotonic() + 5
    while True:
        try:
            port = server.address()[1]
            break
        except RuntimeError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.01)
    yield port
    server.stop()
    thread.join(10)


def test_empty_args_continue(capsys):
    assert execute_command(StubClient(), []) is True
    assert capsys.readouterr().out == ""


def test_ping_success(capsys):
    assert execute_command(StubClient(), ["PING"]) is True
    assert capsys.readouterr().out == "PONG\n"


def test_ping_failure(capsys):
    assert execute_command(StubClient(ping=False), ["PING"]) is False
    assert "PING failed." in capsys.readouterr().err


def test_ping_connection_error_is_failure(capsys):
    assert execute_command(StubClient(fail=True), ["PING"]) is False
    assert "PING failed." in capsys.readouterr().err


def test_set_then_get(capsys):
    client = StubClient()
    assert execute_command(client, ["SET", "name", "value"]) is True
    assert execute_command(client, ["GET", "name"]) is True
    assert capsys.readouterr().out == 'OK\n"value"\n'


def test_set_failure(capsys):
    assert execute_command(StubClient(set_ok=False), ["SET", "a", "b"]) is False
    assert "SET failed." in capsys.readouterr().err


def test_get_missing(capsys):
    assert execute_command(StubClient(), ["GET", "absent"]) is True
    assert capsys.readouterr().out == "(nil)\n"


def test_del_and_exists(capsys):
    client = StubClient(values={"k": "v"})
    assert execute_command(client, ["EXISTS", "k"]) is True
    assert execute_command(client, ["DEL", "k"]) is True
    assert execute_command(client, ["DEL", "k"]) is True
    assert execute_command(client, ["EXISTS", "k"]) is True
    assert capsys.readouterr().out.splitlines() == [
        "(integer) 1",
        "(integer) 1",
        "(integer) 0",
        "(integer) 0",
    ]


def test_wrong_arity_is_invalid(capsys):
    assert execute_command(StubClient(), ["SET", "only-key"]) is True
    assert "Invalid command or arguments." in capsys.readouterr().err


def test_lowercase_command_is_invalid(capsys):
    assert execute_command(StubClient(), ["ping"]) is True
    assert "Invalid command or arguments." in capsys.readouterr().err


def test_quit(capsys):
    assert execute_command(StubClient(), ["QUIT"]) is False
    assert capsys.readouterr().out == "Goodbye!\n"


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_main_bad_port(capsys):
    assert main(["127.0.0.1", "abc"]) == 1
    assert "Invalid port number: abc" in capsys.readouterr().err


def test_main_port_out_of_range(capsys):
    assert main(["127.0.0.1", "0"]) == 1
    assert "Must be between 1 and 65535" in capsys.readouterr().err


def test_main_connection_failure(capsys):
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    assert main(["127.0.0.1", str(port)]) == 1
    assert "Failed to connect to server." in capsys.readouterr().err


def test_main_single_command(server_port, capsys):
    assert main(["127.0.0.1", str(server_port), "PING"]) == 0
    out = capsys.readouterr().out
    assert "PONG" in out
    assert out.rstrip().endswith("Disconnected from Redis server.")


def test_main_interactive(server_port, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("SET a b\n\nGET a\nQUIT\nPING\n"))
    assert main(["127.0.0.1", str(server_port)]) == 0
    lines = capsys.readouterr().out.split("redis> ")
    assert lines[1] == "OK\n"
    assert lines[3] == '"b"\n'
    assert lines[4] == "Goodbye!\nDisconnected from Redis server.\n"


def test_main_interactive_end_of_input(server_port, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("EXISTS nothing-here\n"))
    assert main(["127.0.0.1", str(server_port)]) == 0
    out = capsys.readouterr().out
    assert "(integer) 0" in out
    assert out.endswith("Disconnected from Redis server.\n")