"""Pytest configuration and fixtures."""

import json
import socket
import socketserver
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler
from urllib.parse import parse_qs, urlsplit

import pytest


@dataclass
class RecordedRequest:
    """A request received by the local backend."""

    method: str
    path: str
    query: dict[str, list[str]]
    headers: dict[str, str]
    body: bytes

    def json(self):
        return json.loads(self.body)


@dataclass
class ScriptedResponse:
    status: int
    body: bytes
    content_type: str = "application/json"


@dataclass
class BackendServer:
    """Local HTTP backend that replays scripted responses.

    Attributes:
        port (int): The port the server is listening on
        requests (list): Every request received, in arrival order
    """

    port: int
    routes: dict[tuple[str, str], ScriptedResponse] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    @property
    def base_url(self) -> str:
        return f"http://127.0.0.1:{self.port}/api"

    def respond(self, method: str, path: str, status: int = 200, json_body=None, raw: bytes | None = None):
        """
        Script the response for a route.

        Args:
            method: HTTP method
            path: Route relative to the /api base
            status: HTTP status code
            json_body: Object to send as JSON
            raw: Raw body bytes, used instead of json_body
        """
        body = raw if raw is not None else json.dumps(json_body).encode()
        content_type = "application/octet-stream" if raw is not None else "application/json"
        self.routes[(method, f"/api{path}")] = ScriptedResponse(status, body, content_type)


@pytest.fixture
def backend_server():
    """
    Fixture for a local JSON backend.

    Usage:
        def test_example(backend_server):
            backend_server.respond("GET", "/areas/", json_body=[])
            config = ClientConfig(base_url=backend_server.base_url)
            ...
            assert backend_server.requests[0].method == "GET"
    """
    backend = BackendServer(port=0)

    class BackendRequestHandler(BaseHTTPRequestHandler):
        def _handle(self):
            parts = urlsplit(self.path)
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            backend.requests.append(
                RecordedRequest(
                    method=self.command,
                    path=parts.path,
                    query=parse_qs(parts.query),
                    headers={key.lower(): value for key, value in self.headers.items()},
                    body=body,
                )
            )

            scripted = backend.routes.get((self.command, parts.path))
            if scripted is None:
                scripted = ScriptedResponse(404, json.dumps({"error": "Not found"}).encode())

            self.send_response(scripted.status)
            self.send_header("Content-Type", scripted.content_type)
            self.send_header("Content-Length", str(len(scripted.body)))
            self.end_headers()
            self.wfile.write(scripted.body)

        do_GET = _handle
        do_POST = _handle
        do_PATCH = _handle

        def log_message(self, format, *args):
            pass  # Suppress logging during tests

    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), BackendRequestHandler)
    server.daemon_threads = True
    backend.port = server.server_address[1]

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield backend

    server.shutdown()
    server.server_close()
    thread.join(timeout=1.0)


@pytest.fixture
def closed_port():
    """A local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
