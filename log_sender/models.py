"""Dataclasses for parsed log lines and the events shipped to the ingestion API."""

from dataclasses import dataclass, field, asdict
from datetime import datetime


@dataclass(frozen=True)
class ParsedLogEntry:
    timestamp: datetime  # naive, millisecond precision
    level: str
    component: str
    thread: str
    source_ip: str
    message: str
    attributes: dict[str, str] = field(default_factory=dict)
    raw: str = ""


@dataclass(frozen=True)
class OutgoingEvent:
    """Normalized event, one per parsed line. All values are strings on the wire."""

    time: str
    message: str
    username: str
    ip: str
    domain: str
    mirror: str
    action: str
    status: str
    user_agent: str
    location: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
