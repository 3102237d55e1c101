"""Tests for the example HTTP server endpoints."""

from __future__ import annotations

import json
from typing import Any

import pytest

from examples.server import Server, ServerConfig
from implementation.storage import FailingDeviceStore
from signing_service import (
    AlgorithmRegistry,
    AtomicDeviceStore,
    CryptoConfig,
    SignatureService,
    SignatureServiceConfig,
    StoreConfig,
)
from signing_service.domain.device import seed_signature


def call(server: Server, method: str, path: str, payload: Any = None) -> tuple[int, Any]:
    """Dispatch a request and decode its JSON response.

    Args:
        server: The server under test.
        method: HTTP method.
        path: Request path.
        payload: JSON-serializable body, or raw bytes.

    Returns:
        A tuple of (status_code, decoded_body).
    """
    if payload is None:
        body = b""
    elif isinstance(payload, bytes):
        body = payload
    else:
        body = json.dumps(payload).encode("utf-8")

    status, response = server.dispatch(method, path, body)
    return status, json.loads(response)


@pytest.fixture
def server() -> Server:
    return Server()


def create(server: Server, device_id: str = "d1", algorithm: str = "ecc") -> tuple[int, Any]:
    return call(
        server,
        "POST",
        "/api/v0/create_signature_device",
        {"device_id": device_id, "algorithm": algorithm, "label": "Till"},
    )


def test_health(server: Server) -> None:
    status, body = call(server, "GET", "/api/v0/health")

    assert status == 200
    assert body == {"data": {"status": "pass", "version": "v0"}}


def test_unknown_route(server: Server) -> None:
    status, body = call(server, "GET", "/api/v0/nothing")

    assert status == 404
    assert body == {"errors": ["Not Found"]}


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/v0/create_signature_device"),
        ("GET", "/api/v0/sign_transaction"),
        ("GET", "/api/v0/verify_signature"),
        ("POST", "/api/v0/list_devices"),
        ("POST", "/api/v0/health"),
    ],
)
def test_wrong_method(server: Server, method: str, path: str) -> None:
    status, body = call(server, method, path)

    assert status == 405
    assert body == {"errors": ["Method Not Allowed"]}


def test_create_signature_device(server: Server) -> None:
    status, body = create(server)

    assert status == 200
    assert body["data"]["ok"] is True
    assert body["data"]["device"] == {
        "id": "d1",
        "algorithm": "ecc",
        "label": "Till",
        "signature_counter": 0,
        "last_signature": seed_signature("d1"),
    }


def test_create_duplicate_device(server: Server) -> None:
    create(server)

    status, body = create(server, algorithm="rsa")

    assert status == 400
    assert "already exists" in body["errors"][0]


def test_create_with_unknown_algorithm(server: Server) -> None:
    """Test that uppercase names do not match the lowercase defaults."""
    status, body = create(server, algorithm="RSA")

    assert status == 400
    assert "not available" in body["errors"][0]


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"device_id": "d1"}, "algorithm is required"),
        ({"algorithm": "rsa"}, "device_id is required"),
        ({"device_id": 7, "algorithm": "rsa"}, "device_id must be a string"),
        ({"device_id": "d1", "algorithm": "rsa", "label": 3}, "label must be a string"),
        (["d1", "rsa"], "must be a JSON object"),
    ],
)
def test_create_validation(server: Server, payload: Any, message: str) -> None:
    status, body = call(server, "POST", "/api/v0/create_signature_device", payload)

    assert status == 400
    assert message in body["errors"][0]


def test_invalid_json(server: Server) -> None:
    status, body = call(server, "POST", "/api/v0/sign_transaction", b'{"device_id":')

    assert status == 400
    assert body["errors"]


def test_sign_transaction_chain(server: Server) -> None:
    create(server, algorithm="rsa")

    status, first = call(
        server, "POST", "/api/v0/sign_transaction", {"device_id": "d1", "data": "hello"}
    )
    assert status == 200
    assert first["data"]["signed_data"] == f"0_hello_{seed_signature('d1')}"

    status, second = call(
        server, "POST", "/api/v0/sign_transaction", {"device_id": "d1", "data": "world"}
    )
    assert status == 200
    assert second["data"]["signed_data"] == f"1_world_{first['data']['signature']}"


def test_sign_unknown_device(server: Server) -> None:
    status, body = call(
        server, "POST", "/api/v0/sign_transaction", {"device_id": "missing", "data": "x"}
    )

    assert status == 404
    assert "missing" in body["errors"][0]


def test_sign_requires_data(server: Server) -> None:
    create(server)

    status, body = call(server, "POST", "/api/v0/sign_transaction", {"device_id": "d1"})

    assert status == 400
    assert body == {"errors": ["data is required"]}


def test_verify_signature(server: Server) -> None:
    create(server)
    _, signed = call(
        server, "POST", "/api/v0/sign_transaction", {"device_id": "d1", "data": "hello"}
    )
    signature = signed["data"]["signature"]
    signed_data = signed["data"]["signed_data"]

    status, ok = call(
        server,
        "POST",
        "/api/v0/verify_signature",
        {"device_id": "d1", "data": signed_data, "signature": signature},
    )
    assert status == 200
    assert ok == {"data": {"verified": True}}

    status, bad = call(
        server,
        "POST",
        "/api/v0/verify_signature",
        {"device_id": "d1", "data": signed_data + "x", "signature": signature},
    )
    assert status == 200
    assert bad == {"data": {"verified": False, "reason": "Verification failed"}}


def test_verify_malformed_signature(server: Server) -> None:
    create(server)

    status, body = call(
        server,
        "POST",
        "/api/v0/verify_signature",
        {"device_id": "d1", "data": "x", "signature": "%%%"},
    )

    assert status == 400
    assert "base64" in body["errors"][0]


def test_verify_unknown_device(server: Server) -> None:
    status, _ = call(
        server,
        "POST",
        "/api/v0/verify_signature",
        {"device_id": "missing", "data": "x", "signature": "c2ln"},
    )

    assert status == 404


def test_list_devices(server: Server) -> None:
    create(server, "a")
    create(server, "b", "rsa")
    call(server, "POST", "/api/v0/sign_transaction", {"device_id": "a", "data": "x"})

    status, body = call(server, "GET", "/api/v0/list_devices")

    assert status == 200
    devices = sorted(body["data"]["devices"], key=lambda device: device["id"])
    assert [device["id"] for device in devices] == ["a", "b"]
    assert [device["signature_counter"] for device in devices] == [1, 0]
    assert all("private_key" not in device for device in devices)


def test_persistence_failure_is_internal_error() -> None:
    store = FailingDeviceStore()
    server = Server(
        SignatureService(
            SignatureServiceConfig(
                crypto=CryptoConfig(registry=AlgorithmRegistry.default()),
                store=StoreConfig(device=AtomicDeviceStore(store)),
            )
        )
    )
    create(server)
    store.fail_saves = True

    status, body = call(
        server, "POST", "/api/v0/sign_transaction", {"device_id": "d1", "data": "x"}
    )

    assert status == 500
    assert "Something is wrong on our side" in body["errors"][0]


class TestServerConfig:
    """Tests for ServerConfig.from_env."""

    def test_defaults(self) -> None:
        assert ServerConfig.from_env({}) == ServerConfig("localhost", 8080, "INFO")

    def test_overrides(self) -> None:
        config = ServerConfig.from_env(
            {
                "SIGNING_SERVICE_HOST": "0.0.0.0",
                "SIGNING_SERVICE_PORT": "9000",
                "SIGNING_SERVICE_LOG_LEVEL": "debug",
            }
        )

        assert config == ServerConfig("0.0.0.0", 9000, "DEBUG")

    @pytest.mark.parametrize("port", ["eighty", "70000", "-1"])
    def test_invalid_port(self, port: str) -> None:
        with pytest.raises(ValueError, match="SIGNING_SERVICE_PORT"):
            ServerConfig.from_env({"SIGNING_SERVICE_PORT": port})
