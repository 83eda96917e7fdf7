import threading
import time

import pytest

from log_sender.server import SimpleIngestServer


@pytest.fixture
def ingest_server():
    """Start an ingest server on a random port and stop it after the test."""
    shutdown = threading.Event()
    server = SimpleIngestServer("127.0.0.1", 0, shutdown)
    t = threading.Thread(target=server.start, daemon=True)
    t.start()
    for _ in range(50):
        if server.server_address:
            break
        time.sleep(0.02)
    yield server
    server.stop()
    t.join(timeout=2)
