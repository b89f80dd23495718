import json
import socket
from contextlib import closing
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from threading import Thread

import pytest

from localdoc_sdk.config import get_sdk_config, settings


def pick_free_tcp_port(host: str = "127.0.0.1") -> int:
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def _ollama_reply(content: str, model: str = "llama3.1") -> dict:
    """Build a chat response shaped like the inference server's non-streaming reply."""
    return {
        "model": model,
        "created_at": "2024-07-25T14:32:10.123456Z",
        "message": {"role": "assistant", "content": content},
        "done_reason": "stop",
        "done": True,
        "total_duration": 5191566416,
        "load_duration": 2154458,
        "prompt_eval_count": 26,
        "prompt_eval_duration": 383809000,
        "eval_count": 298,
        "eval_duration": 4799921000,
    }


@dataclass
class CannedServer:
    """Serves one fixed status and body for every POST and records what it received."""

    port: int
    status: int = 200
    body: bytes = b""
    requests: list[dict] = field(default_factory=list)

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}/api/chat"

    def reply_json(self, payload: dict, status: int = 200) -> None:
        self.status = status
        self.body = json.dumps(payload).encode("utf-8")

    def reply_raw(self, body: bytes, status: int = 200) -> None:
        self.status = status
        self.body = body


def _make_handler(canned: CannedServer):
    class CannedChatHandler(BaseHTTPRequestHandler):
        def do_POST(self):
            content_length = int(self.headers["Content-Length"])
            post_data = self.rfile.read(content_length)
            canned.requests.append(
                {
                    "path": self.path,
                    "content_type": self.headers.get("Content-Type"),
                    "raw": post_data,
                    "json": json.loads(post_data),
                }
            )

            self.send_response(canned.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(canned.body)))
            self.end_headers()
            self.wfile.write(canned.body)

        def log_message(self, format, *args):
            pass

    return CannedChatHandler


@pytest.fixture
def canned_server():
    canned = CannedServer(port=0)
    try:
        server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(canned))
    except PermissionError as exc:
        pytest.skip(f"Local HTTP server unavailable in this environment: {exc}")
    canned.port = server.server_address[1]
    thread = Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield canned
    server.shutdown()
    server.server_close()
    thread.join(timeout=1)


@pytest.fixture
def closed_port_url():
    """URL of a loopback port with no listener."""
    return f"http://127.0.0.1:{pick_free_tcp_port()}/api/chat"


@pytest.fixture(autouse=True)
def _restore_settings():
    original = get_sdk_config()
    try:
        yield
    finally:
        settings.endpoint_url = original.endpoint_url
        settings.model = original.model
        settings.timeout = original.timeout


@pytest.fixture
def ollama_reply():
    return _ollama_reply


@pytest.fixture
def truncating_server():
    """Answers one request with a status line and a body shorter than its Content-Length, then hangs up."""
    holder: dict = {"status_line": "HTTP/1.1 200 OK"}
    try:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
    except PermissionError as exc:
        pytest.skip(f"Local TCP listener unavailable in this environment: {exc}")
    listener.listen(1)
    port = listener.getsockname()[1]

    def _serve():
        conn, _ = listener.accept()
        with conn:
            received = b""
            while b"\r\n\r\n" not in received:
                received += conn.recv(65536)
            head, _, payload = received.partition(b"\r\n\r\n")
            content_length = 0
            for line in head.split(b"\r\n")[1:]:
                name, _, value = line.partition(b":")
                if name.strip().lower() == b"content-length":
                    content_length = int(value.strip())
            while len(payload) < content_length:
                payload += conn.recv(65536)
            conn.sendall(
                (
                    f"{holder['status_line']}\r\n"
                    "Content-Type: application/json\r\n"
                    "Content-Length: 100\r\n"
                    "Connection: close\r\n"
                    "\r\n"
                    '{"error"'
                ).encode("utf-8")
            )

    def _start(status_line: str) -> str:
        holder["status_line"] = status_line
        thread = Thread(target=_serve, daemon=True)
        thread.start()
        holder["thread"] = thread
        return f"http://127.0.0.1:{port}/api/chat"

    yield _start
    if (thread := holder.get("thread")) is not None:
        thread.join(timeout=1)
    listener.close()
