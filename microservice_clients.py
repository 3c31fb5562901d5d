"""Client side of the ZeroMQ storage microservice."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

import zmq

from repo_json import StorageError

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {
    "storage": 5570,
}

TIMEOUT_MS = 1500
_CONTEXT = zmq.Context.instance()


# ---------- Low-level send helpers ----------
def _make_socket(port: int, timeout_ms: int = TIMEOUT_MS):
    socket = _CONTEXT.socket(zmq.REQ)
    socket.setsockopt(zmq.RCVTIMEO, timeout_ms)
    socket.setsockopt(zmq.SNDTIMEO, timeout_ms)
    socket.setsockopt(zmq.LINGER, 0)
    socket.connect(f"tcp://localhost:{port}")
    return socket


def _send_json(socket, port: int, payload: dict) -> Tuple[Optional[dict], Optional[str]]:
    try:
        socket.send_json(payload)
        return socket.recv_json(), None
    except zmq.error.Again:
        return None, f"Timed out contacting service on port {port}."
    except zmq.error.ZMQError as exc:
        return None, f"Service error on port {port}: {exc}"
    except ValueError as exc:
        return None, f"Bad reply from service on port {port}: {exc}"
    finally:
        socket.close()


class ServiceBackend:
    """Durable key/value backend served by microservices/storage_service.py."""

    def __init__(
        self,
        port: int = DEFAULT_PORTS["storage"],
        timeout_ms: int = TIMEOUT_MS,
        socket_factory: Optional[Callable[[int, int], object]] = None,
    ):
        self.port = port
        self.timeout_ms = timeout_ms
        self._socket_factory = socket_factory or _make_socket

    def _call(self, payload: dict) -> Tuple[Optional[dict], Optional[str]]:
        socket = self._socket_factory(self.port, self.timeout_ms)
        response, error = _send_json(socket, self.port, payload)
        if error:
            return None, error
        if not isinstance(response, dict) or response.get("status") != "ok":
            message = response.get("error") if isinstance(response, dict) else None
            return None, message or "Unknown storage service error."
        return response, None

    def get(self, key: str) -> Optional[str]:
        response, error = self._call({"request_type": "get", "key": key})
        if error:
            raise StorageError(error)
        value = response.get("value")
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Storage service returned a non-string for {key!r}")
        return value

    def set(self, key: str, value: str) -> bool:
        _, error = self._call({"request_type": "set", "key": key, "value": value})
        if error:
            logger.error("Storage service rejected write of %r: %s", key, error)
            return False
        return True
