import json

import pytest

from conftest import MemoryBackend
from microservices.storage_service import handle_message, process_request
from repo_json import JSONFileBackend, StorageError


def test_set_then_get(tmp_path):
    backend = JSONFileBackend(str(tmp_path / "svc.json"))
    assert process_request({"request_type": "set", "key": "@habits", "value": "[]"}, backend) == {
        "status": "ok",
        "value": None,
    }
    assert process_request({"request_type": "get", "key": "@habits"}, backend) == {
        "status": "ok",
        "value": "[]",
    }


def test_get_missing_key_returns_null():
    assert process_request({"request_type": "get", "key": "nope"}, MemoryBackend()) == {
        "status": "ok",
        "value": None,
    }


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"key": "a"},
        {"request_type": "delete", "key": "a"},
        {"request_type": "get", "key": ""},
        {"request_type": "set", "key": "a"},
        {"request_type": "set", "key": "a", "value": 3},
    ],
)
def test_malformed_requests(payload):
    response = process_request(payload, MemoryBackend())
    assert response["status"] == "error"
    assert response["error"]


def test_failed_write_is_an_error():
    response = process_request(
        {"request_type": "set", "key": "a", "value": "x"}, MemoryBackend(fail_writes=True)
    )
    assert response == {"status": "error", "error": "Could not store value for 'a'."}


def test_storage_error_is_reported():
    class Broken:
        def get(self, key):
            raise StorageError("corrupt file")

    response = process_request({"request_type": "get", "key": "a"}, Broken())
    assert response == {"status": "error", "error": "corrupt file"}


def test_handle_message_rejects_non_json():
    assert handle_message(b"\xff\xfe", MemoryBackend())["status"] == "error"
    assert handle_message(b"{oops", MemoryBackend())["status"] == "error"


def test_handle_message_decodes_request():
    backend = MemoryBackend({"k": "v"})
    raw = json.dumps({"request_type": "get", "key": "k"}).encode("utf-8")
    assert handle_message(raw, backend) == {"status": "ok", "value": "v"}
