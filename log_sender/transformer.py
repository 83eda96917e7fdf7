"""Turn raw log lines into the normalized events shipped to the ingestion API."""

import logging

from log_sender.config import Config, resolve_timezone
from log_sender.errors import MalformedTimestamp
from log_sender.models import OutgoingEvent, ParsedLogEntry
from log_sender.parser import parse_log_line, to_epoch_seconds

logger = logging.getLogger(__name__)

# Level -> status; any other level is reported as "success"
_LEVEL_STATUS = {
    "WARN": "warning",
    "ERROR": "error",
}


def status_for_level(level: str) -> str:
    status = "success"
    if level in _LEVEL_STATUS:
        status = _LEVEL_STATUS[level]
    return status


class RecordTransformer:
    """Applies the line grammar and derives one OutgoingEvent per matching line."""

    def __init__(self, config: Config):
        self._config = config
        self._tz = resolve_timezone(config.timezone)

    def transform(self, line: str) -> OutgoingEvent | None:
        """Return the event for *line*, or None if the line should be skipped."""
        try:
            entry = parse_log_line(line)
        except MalformedTimestamp as e:
            logger.warning("Dropping line with %s", e)
            return None

        if entry is None:
            logger.debug("Skipping unparseable line: %s", line[:100])
            return None
        return self.build_event(entry)

    def build_event(self, entry: ParsedLogEntry) -> OutgoingEvent:
        attrs = entry.attributes
        return OutgoingEvent(
            time=str(to_epoch_seconds(entry.timestamp, self._tz)),
            message=entry.message,
            username=attrs.get("userCode", ""),
            ip=entry.source_ip,
            domain=self._config.domain,
            mirror=self._config.mirror,
            action=attrs.get("actionCode") or self._config.default_action,
            status=status_for_level(entry.level),
            user_agent=self._config.user_agent,
            location=self._config.location,
        )
