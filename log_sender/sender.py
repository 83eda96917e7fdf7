"""HTTP sender: posts one NDJSON event per request to the ingestion endpoint."""

import logging

import requests

from log_sender.config import Config
from log_sender.errors import DeliveryFailure
from log_sender.formatter import format_ndjson, to_json
from log_sender.models import OutgoingEvent

logger = logging.getLogger(__name__)

NDJSON_CONTENT_TYPE = "application/x-ndjson"


class HTTPSender:
    """Delivers events synchronously. Failures are logged and reported, never retried."""

    def __init__(self, config: Config, session: requests.Session | None = None):
        self._url = config.api_url
        self._timeout = config.timeout
        self._session = session or requests.Session()
        self._session.headers["Content-Type"] = NDJSON_CONTENT_TYPE
        if config.authorization:
            self._session.headers["Authorization"] = config.authorization

    def send(self, event: OutgoingEvent) -> bool:
        """Send one event. Returns True on a 2xx response, False otherwise."""
        logger.info("Preparing to send payload: %s", to_json(event))
        try:
            self._post(format_ndjson(event))
        except DeliveryFailure as e:
            logger.error("Failed to send log: %s", e)
            cause = e.__cause__
            if isinstance(cause, (requests.ConnectionError, requests.Timeout)):
                logger.info("(Network error talking to %s)", self._url)
            return False
        logger.info("Successfully sent log.")
        return True

    def _post(self, body: bytes):
        try:
            response = self._session.post(self._url, data=body, timeout=self._timeout)
        except requests.Timeout as e:
            raise DeliveryFailure(f"timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise DeliveryFailure(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise DeliveryFailure(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
