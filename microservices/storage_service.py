"""Microservice that serves habit data as string values under string keys.

It shares JSONFileBackend with the app, so start it from the repository
root as a module, or through the installed script:

    python -m microservices.storage_service [port]
    habit-storage-service [port]

Running the file directly (python microservices/storage_service.py) puts
microservices/ first on sys.path and the repo_json import fails.
"""

import json
import logging
import os
import sys
import threading

import zmq

from repo_json import JSONFileBackend, StorageError

logger = logging.getLogger("storage-service")

DEFAULT_PORT = 5570
DEFAULT_DATA_PATH = "data/storage_service.json"


def _error(message):
    """Return a consistent error payload."""
    return {"status": "error", "error": message}


def _validate(payload):
    """Return an error message for a malformed request, else None."""
    if not isinstance(payload, dict):
        return "Request must be a JSON object."
    if payload.get("request_type") not in ("get", "set"):
        return "request_type must be 'get' or 'set'."
    if not isinstance(payload.get("key"), str) or not payload["key"]:
        return "Request must contain a non-empty 'key' string."
    if payload["request_type"] == "set" and not isinstance(payload.get("value"), str):
        return "A 'set' request must contain a 'value' string."
    return None


def process_request(payload, backend) -> dict:
    """
    payload: {"request_type": "get"|"set", "key": str, "value": str}
    returns {"status": "ok", "value": ...} or {"status": "error", "error": ...}
    """
    error = _validate(payload)
    if error:
        return _error(error)
    key = payload["key"]
    try:
        if payload["request_type"] == "get":
            return {"status": "ok", "value": backend.get(key)}
        if not backend.set(key, payload["value"]):
            return _error(f"Could not store value for '{key}'.")
        return {"status": "ok", "value": None}
    except (OSError, StorageError) as exc:
        logger.error("Storage failure for %r: %s", key, exc)
        return _error(str(exc))


def handle_message(raw: bytes, backend) -> dict:
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return _error("Request is not valid JSON.")
    return process_request(payload, backend)


def shutdown_listener(stop_flag):
    """
    Waits for the user to type 'q' then Enter to request shutdown.
    Sets stop_flag[0] = True so the main loop can exit cleanly.
    """
    print("Press 'q' then Enter to stop the microservice...")
    for line in sys.stdin:
        if line.strip().lower() == "q":
            stop_flag[0] = True
            print("Shutdown requested...")
            break


def start_shutdown_listener(stop_flag):
    listener_thread = threading.Thread(
        target=shutdown_listener,
        args=(stop_flag,),
        daemon=True
    )
    listener_thread.start()
    return listener_thread


def serve_requests(socket, backend, stop_flag):
    """Process inbound requests until stop_flag is set."""
    while not stop_flag[0]:
        if socket.poll(timeout=1000):
            raw = socket.recv()
            socket.send_json(handle_message(raw, backend))


def build_server_socket(port):
    """Create and bind the REP socket for the service."""
    context = zmq.Context()
    socket = context.socket(zmq.REP)
    address = f"tcp://*:{port}"
    socket.bind(address)
    return context, socket, address


def shutdown(context, socket):
    print("Shutting down microservice...")
    socket.close()
    context.term()


def run_service(port, data_path):
    """Start the microservice lifecycle for the given port."""
    backend = JSONFileBackend(data_path)
    context, socket, address = build_server_socket(port)
    print(f"Storage microservice listening on {address} (data: {data_path})")
    stop_flag = [False]
    start_shutdown_listener(stop_flag)
    try:
        serve_requests(socket, backend, stop_flag)
    except KeyboardInterrupt:
        print("\nInterrupted via keyboard.")
    except zmq.error.ZMQError as exc:
        logger.error("Error in microservice: %s", exc)
    finally:
        shutdown(context, socket)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    port = DEFAULT_PORT
    if argv:
        try:
            port = int(argv[0])
        except ValueError:
            print(f"Invalid port '{argv[0]}', using default {DEFAULT_PORT} instead.")
    data_path = os.getenv("STORAGE_SERVICE_DATA_PATH", DEFAULT_DATA_PATH)
    run_service(port, data_path)
    sys.exit(0)


if __name__ == "__main__":
    main()
