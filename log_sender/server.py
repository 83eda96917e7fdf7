"""Simple HTTP ingestion sink for testing the log sender.

Accepts NDJSON POST bodies the way a ``/insert/jsonline`` endpoint does and
stores decoded events in ``received`` for test assertions.
"""

import json
import logging
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("time", "message")


class _IngestHandler(BaseHTTPRequestHandler):
    server_version = "SimpleIngest/1.0"

    def do_POST(self):
        owner: SimpleIngestServer = self.server.owner
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length)

        if owner.response_delay:
            time.sleep(owner.response_delay)

        if owner.expected_authorization is not None:
            if self.headers.get("Authorization") != owner.expected_authorization:
                self._reply(401, "unauthorized")
                return

        if owner.status_code is not None:
            self._reply(owner.status_code, "forced status")
            return

        events = []
        for line in body.split(b"\n"):
            if not line.strip():
                continue
            try:
                msg = json.loads(line)
            except json.JSONDecodeError:
                self._reply(400, "invalid JSON")
                return
            if not isinstance(msg, dict) or any(k not in msg for k in REQUIRED_FIELDS):
                self._reply(400, "missing required fields: time, message")
                return
            events.append(msg)

        owner.record(events, dict(self.headers))
        for msg in events:
            logger.info("[%s] %s", msg.get("status", "-"), msg["message"])
        self._reply(200, "")

    def _reply(self, status: int, text: str):
        data = text.encode("utf-8")
        try:
            self.send_response(status)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)
        except OSError:
            # client already gave up, e.g. timed out
            pass

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class SimpleIngestServer:
    """Threaded HTTP server that receives NDJSON events.

    ``response_delay`` and ``status_code`` let tests simulate slow or failing sinks.
    """

    def __init__(
        self,
        host: str,
        port: int,
        shutdown_event: threading.Event,
        expected_authorization: str | None = None,
    ):
        self._host = host
        self._port = port
        self._shutdown = shutdown_event
        self._httpd: ThreadingHTTPServer | None = None
        self._server_address: tuple | None = None
        self._lock = threading.Lock()
        self.expected_authorization = expected_authorization
        self.response_delay = 0.0
        self.status_code: int | None = None
        self.received: list[dict] = []
        self.request_headers: list[dict] = []

    @property
    def server_address(self) -> tuple:
        return self._server_address

    @property
    def url(self) -> str:
        host, port = self._server_address[:2]
        return f"http://{host}:{port}/insert/jsonline"

    def record(self, events: list[dict], headers: dict):
        with self._lock:
            self.received.extend(events)
            self.request_headers.append(headers)

    def start(self):
        """Bind and serve requests until shutdown."""
        self._httpd = ThreadingHTTPServer((self._host, self._port), _IngestHandler)
        self._httpd.daemon_threads = True
        self._httpd.timeout = 0.2
        self._httpd.owner = self
        self._server_address = self._httpd.server_address
        logger.info("Ingest server listening on %s:%d", *self._server_address[:2])

        try:
            while not self._shutdown.is_set():
                self._httpd.handle_request()
        finally:
            self._httpd.server_close()

    def stop(self):
        """Signal shutdown; the serve loop closes the socket on its next pass."""
        self._shutdown.set()
