"""Shared fixtures: a local stand-in for a Glances server."""

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

SAMPLE_STATS = {
    "system": {"hostname": "nas", "os_version": "6.1.0-18-amd64"},
    "cpu": {"total": 7.3},
    "mem": {"used": 4 * 1024**3, "total": 16 * 1024**3, "percent": 25.0},
    "fs": [
        {"mnt_point": "/", "size": 100 * 1024**3, "percent": 41.3},
        {"mnt_point": "/boot/efi", "size": 512 * 1024**2, "percent": 1.2},
        {"mnt_point": "/srv", "size": 2048 * 1024**3, "percent": 73.04},
    ],
}

SAMPLE_TEXT = (
    "Server: nas\n"
    "Release: 6.1.0-18-amd64\n"
    "-------------------\n"
    "CPU Load: 7.3%\n"
    "RAM: 25.0% (4.00 / 16.00 GB)\n"
    "\n"
    "Disks:\n"
    "/: 41.3% of 100 GB\n"
    "/srv: 73.0% of 2048 GB\n"
)


class StatsHandler(BaseHTTPRequestHandler):
    """Serves whatever response the test configured on the server."""

    server: "StatsServer"

    def do_GET(self) -> None:
        self.server.paths.append(self.path)
        if self.server.delay:
            time.sleep(self.server.delay)
        status, body = self.server.status, self.server.body
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args) -> None:
        return


class StatsServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), StatsHandler)
        self.status = 200
        self.body = json.dumps(SAMPLE_STATS)
        self.paths: list[str] = []
        self.delay = 0.0  # Seconds to hold each response

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}/api/4/all"

    def respond(self, status: int = 200, body: str = "") -> None:
        """Set the response served from now on."""
        self.status = status
        self.body = body


@pytest.fixture
def stats_server():
    """A running local stats server answering with SAMPLE_STATS."""
    server = StatsServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True, name="StatsServer")
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5.0)


@pytest.fixture
def closed_port_url() -> str:
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/api/4/all"


@pytest.fixture
def sample_stats() -> dict:
    return json.loads(json.dumps(SAMPLE_STATS))


@pytest.fixture
def sample_text() -> str:
    """Display text expected for SAMPLE_STATS with English labels."""
    return SAMPLE_TEXT
