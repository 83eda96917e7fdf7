"""Generator-based, read-once line source for the input log file."""

import logging
from typing import Generator

from log_sender.errors import SourceUnavailable

logger = logging.getLogger(__name__)


def iter_lines(path: str) -> Generator[str, None, None]:
    """Yield each line of *path* with its line ending removed.

    Universal newlines mode folds \\r\\n and \\r into \\n. Raises
    SourceUnavailable before the first line if the file cannot be opened.
    """
    try:
        f = open(path, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceUnavailable(path, e.strerror or str(e)) from e

    logger.debug("Opened %s", path)
    with f:
        for line in f:
            yield line.rstrip("\n")
