"""Serialize outgoing events as NDJSON."""

import json

from log_sender.models import OutgoingEvent


def to_json(event: OutgoingEvent) -> str:
    """Compact single-line JSON object for *event*."""
    return json.dumps(event.to_dict(), separators=(",", ":"), ensure_ascii=False)


def format_ndjson(event: OutgoingEvent) -> bytes:
    """Serialize an event to compact JSON + newline, encoded as UTF-8."""
    return (to_json(event) + "\n").encode("utf-8")
