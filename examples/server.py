"""Example HTTP server for the signing service.

This server exposes signature device registration, chained signing,
verification and listing as JSON endpoints under /api/v0. Run it with
``python -m examples.server``.
"""

import json
import logging
import os
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Dict, Mapping, Optional

from signing_service import (
    AlgorithmRegistry,
    AtomicDeviceStore,
    CryptoConfig,
    InMemoryDeviceStore,
    SignatureService,
    SignatureServiceConfig,
    StoreConfig,
)
from signing_service.exceptions import (
    AlgorithmUnavailableError,
    DeviceExistsError,
    DeviceNotFoundError,
    InvalidRequestError,
    MalformedSignatureError,
)

logger = logging.getLogger("signing_service.server")

API_PREFIX = "/api/v0"
VERSION = "v0"
INTERNAL_ERROR_MESSAGE = (
    "Something is wrong on our side, please try again in a few moments, "
    "our development team has been notified"
)


@dataclass
class ServerConfig:
    """Configuration for the HTTP server.

    Attributes:
        host: Interface to listen on.
        port: TCP port to listen on.
        log_level: Name of the logging level.
    """

    host: str = "localhost"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Read the configuration from SIGNING_SERVICE_* environment variables.

        Args:
            environ: Variables to read, os.environ by default.

        Returns:
            The configuration, with defaults for unset variables.

        Raises:
            ValueError: If SIGNING_SERVICE_PORT is not a valid port number.
        """
        env = os.environ if environ is None else environ

        raw_port = env.get("SIGNING_SERVICE_PORT", str(cls.port))
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ValueError(f"invalid SIGNING_SERVICE_PORT: {raw_port!r}") from e
        if not 0 <= port <= 65535:
            raise ValueError(f"invalid SIGNING_SERVICE_PORT: {raw_port!r}")

        return cls(
            host=env.get("SIGNING_SERVICE_HOST", cls.host),
            port=port,
            log_level=env.get("SIGNING_SERVICE_LOG_LEVEL", cls.log_level).upper(),
        )


class Server:
    """Signing service HTTP endpoints.

    Each endpoint takes the raw request body and returns a
    (status_code, response_body) tuple.
    """

    def __init__(self, service: Optional[SignatureService] = None) -> None:
        """Initialize the server.

        Args:
            service: The signature service to expose. A service with the
                default algorithms and an in-memory store is built if omitted.
        """
        if service is None:
            service = SignatureService(
                SignatureServiceConfig(
                    crypto=CryptoConfig(registry=AlgorithmRegistry.default()),
                    store=StoreConfig(device=AtomicDeviceStore(InMemoryDeviceStore())),
                )
            )
        self.service = service

    @staticmethod
    def _data(status: int, data: Any) -> tuple[int, str]:
        return (status, json.dumps({"data": data}, indent=2))

    @staticmethod
    def _errors(status: int, *errors: str) -> tuple[int, str]:
        return (status, json.dumps({"errors": list(errors)}))

    @staticmethod
    def _parse(body: bytes, *required: str) -> Dict[str, Any]:
        """Parse a JSON object body and check its required string fields.

        Raises:
            InvalidRequestError: If the body is not a JSON object or a
                required field is missing or empty.
        """
        try:
            message = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidRequestError(str(e)) from e

        if not isinstance(message, dict):
            raise InvalidRequestError("request body must be a JSON object")

        for name in required:
            value = message.get(name)
            if value is not None and not isinstance(value, str):
                raise InvalidRequestError(f"{name} must be a string")
            if not value:
                raise InvalidRequestError(f"{name} is required")

        return message

    def _wrap_response(self, body: bytes, logic: Callable[[bytes], Any]) -> tuple[int, str]:
        """Wrap an endpoint with error to status code mapping.

        Args:
            body: The request body bytes.
            logic: The endpoint logic, returning the response data.

        Returns:
            A tuple of (status_code, response_body).
        """
        try:
            return self._data(200, logic(body))
        except (
            InvalidRequestError,
            DeviceExistsError,
            MalformedSignatureError,
        ) as e:
            return self._errors(400, str(e))
        except DeviceNotFoundError as e:
            return self._errors(404, str(e))
        except Exception:
            logger.exception("request failed")
            return self._errors(500, INTERNAL_ERROR_MESSAGE)

    def create_signature_device(self, body: bytes) -> tuple[int, str]:
        """Handle signature device creation requests."""

        def handler(raw: bytes) -> Dict[str, Any]:
            request = self._parse(raw, "device_id", "algorithm")
            label = request.get("label")
            if label is not None and not isinstance(label, str):
                raise InvalidRequestError("label must be a string")

            try:
                device = self.service.create_device(
                    request["device_id"], request["algorithm"], label
                )
            except AlgorithmUnavailableError as e:
                # Asking for an unknown scheme is a user error here.
                raise InvalidRequestError(str(e)) from e

            return {"ok": True, "device": device.to_dict()}

        return self._wrap_response(body, handler)

    def sign_transaction(self, body: bytes) -> tuple[int, str]:
        """Handle chained signing requests."""

        def handler(raw: bytes) -> Dict[str, Any]:
            request = self._parse(raw, "device_id", "data")
            result = self.service.sign(request["device_id"], request["data"])
            return {"signature": result.signature, "signed_data": result.signed_data}

        return self._wrap_response(body, handler)

    def verify_signature(self, body: bytes) -> tuple[int, str]:
        """Handle signature verification requests."""

        def handler(raw: bytes) -> Dict[str, Any]:
            request = self._parse(raw, "device_id", "data", "signature")
            result = self.service.verify(
                request["device_id"], request["data"], request["signature"]
            )

            response: Dict[str, Any] = {"verified": result.verified}
            if result.reason is not None:
                response["reason"] = result.reason
            return response

        return self._wrap_response(body, handler)

    def list_devices(self, body: bytes) -> tuple[int, str]:
        """Handle device listing requests."""

        def handler(raw: bytes) -> Dict[str, Any]:
            return {"devices": [device.to_dict() for device in self.service.list_devices()]}

        return self._wrap_response(body, handler)

    def health(self, body: bytes) -> tuple[int, str]:
        """Handle health check requests."""
        return self._data(200, {"status": "pass", "version": VERSION})

    def routes(self) -> Dict[str, tuple[str, Callable[[bytes], tuple[int, str]]]]:
        """Map each path to its HTTP method and endpoint."""
        return {
            f"{API_PREFIX}/create_signature_device": ("POST", self.create_signature_device),
            f"{API_PREFIX}/sign_transaction": ("POST", self.sign_transaction),
            f"{API_PREFIX}/verify_signature": ("POST", self.verify_signature),
            f"{API_PREFIX}/list_devices": ("GET", self.list_devices),
            f"{API_PREFIX}/health": ("GET", self.health),
        }

    def dispatch(self, method: str, path: str, body: bytes) -> tuple[int, str]:
        """Route a request to its endpoint.

        Args:
            method: The HTTP method.
            path: The request path.
            body: The request body bytes.

        Returns:
            A tuple of (status_code, response_body).
        """
        route = self.routes().get(path)
        if route is None:
            return self._errors(404, "Not Found")

        expected_method, endpoint = route
        if method != expected_method:
            return self._errors(405, "Method Not Allowed")

        return endpoint(body)


class RequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the signing service."""

    server_instance: Server

    def _handle(self) -> None:
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length) if content_length > 0 else b""

        status_code, response = self.server_instance.dispatch(self.command, self.path, body)

        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(response.encode("utf-8"))

    def do_GET(self) -> None:
        """Handle GET requests."""
        self._handle()

    def do_POST(self) -> None:
        """Handle POST requests."""
        self._handle()

    def log_message(self, format: str, *args: Any) -> None:
        """Log HTTP requests through the server logger."""
        logger.info("%s - %s", self.address_string(), format % args)


def main() -> None:
    """Start the server."""
    config = ServerConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    RequestHandler.server_instance = Server()

    httpd = ThreadingHTTPServer((config.host, config.port), RequestHandler)
    logger.info("Server running on http://%s:%d", config.host, config.port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down server...")
    finally:
        httpd.server_close()


if __name__ == "__main__":
    main()
