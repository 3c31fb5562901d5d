import pytest
import zmq

from conftest import MemoryBackend
from microservice_clients import ServiceBackend
from microservices.storage_service import process_request
from repo_json import StorageError
from store import HabitStore


class LoopbackSocket:
    """Answers REQ messages by calling the service handler directly."""

    def __init__(self, backend):
        self.backend = backend
        self.sent = []
        self.closed = False
        self._reply = None

    def send_json(self, payload):
        self.sent.append(payload)
        self._reply = process_request(payload, self.backend)

    def recv_json(self):
        return self._reply

    def close(self):
        self.closed = True


class TimeoutSocket(LoopbackSocket):
    def recv_json(self):
        raise zmq.error.Again()


def make_client(socket):
    sockets = []

    def factory(port, timeout_ms):
        sockets.append((port, timeout_ms))
        return socket

    return ServiceBackend(port=6000, timeout_ms=250, socket_factory=factory), sockets


def test_get_and_set_through_service():
    socket = LoopbackSocket(MemoryBackend())
    client, sockets = make_client(socket)
    assert client.set("@habits", "[]") is True
    assert client.get("@habits") == "[]"
    assert client.get("missing") is None
    assert sockets == [(6000, 250)] * 3
    assert socket.closed


def test_timeout_on_get_raises_storage_error():
    client, _ = make_client(TimeoutSocket(MemoryBackend()))
    with pytest.raises(StorageError, match="Timed out"):
        client.get("@habits")


def test_timeout_on_set_reports_failure():
    client, _ = make_client(TimeoutSocket(MemoryBackend()))
    assert client.set("@habits", "[]") is False


def test_service_error_on_set_reports_failure():
    client, _ = make_client(LoopbackSocket(MemoryBackend(fail_writes=True)))
    assert client.set("@habits", "[]") is False


def test_store_fails_soft_when_service_is_down(gym):
    client, _ = make_client(TimeoutSocket(MemoryBackend()))
    store = HabitStore(client)
    assert store.restore() == []
    assert store.persist([gym]) is False


def test_store_round_trip_over_service(gym, review):
    store = HabitStore(make_client(LoopbackSocket(MemoryBackend()))[0])
    assert store.persist([gym, review])
    assert store.restore() == [gym, review]
