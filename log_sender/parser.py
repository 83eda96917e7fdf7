"""Log line parser: compiled grammar, attribute scan and epoch conversion.

Expected line shape:

    2026-01-15 10:50:06,834 INFO [AuthService] (pool-2-thread-1) IP:[192.168.1.10] logType=4 userCode=alice
"""

import math
import re
from datetime import datetime, tzinfo

from log_sender.errors import MalformedTimestamp
from log_sender.models import ParsedLogEntry

# digit and word classes are spelled out so they stay ASCII-only
LOG_PATTERN = re.compile(
    r"^(?P<timestamp>[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3})\s+"
    r"(?P<level>[A-Za-z0-9_]+)\s+"
    r"\[(?P<component>.*?)\]\s+"
    r"\((?P<thread>.*?)\)\s+"
    r"IP:\[(?P<ip>.*?)\]\s+"
    r"(?P<message>.*)$"
)

ATTRIBUTE_PATTERN = re.compile(r"([A-Za-z0-9_]+)=(\S*)")

# %f reads ",834" as 834000 microseconds, i.e. a decimal fraction of a second
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S,%f"


def extract_attributes(message: str) -> dict[str, str]:
    """Collect key=value tokens from *message*, left to right. Later keys win."""
    return {key: value for key, value in ATTRIBUTE_PATTERN.findall(message)}


def parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedTimestamp(value) from e


def to_epoch_seconds(timestamp: datetime, tz: tzinfo | None) -> int:
    """Whole seconds since the epoch, sub-second remainder dropped.

    A naive *timestamp* is placed in *tz*; ``tz=None`` means the local zone
    of the running process.
    """
    if tz is not None:
        timestamp = timestamp.replace(tzinfo=tz)
    return math.floor(timestamp.timestamp())


def parse_log_line(line: str) -> ParsedLogEntry | None:
    """Parse a single log line. Returns None for lines that do not match the grammar.

    Raises MalformedTimestamp if the line matches but its date-time does not exist.
    """
    stripped = line.rstrip("\r\n")
    match = LOG_PATTERN.match(stripped)
    if not match:
        return None

    message = match.group("message")
    return ParsedLogEntry(
        timestamp=parse_timestamp(match.group("timestamp")),
        level=match.group("level"),
        component=match.group("component"),
        thread=match.group("thread"),
        source_ip=match.group("ip"),
        message=message,
        attributes=extract_attributes(message),
        raw=stripped,
    )
