"""Sequential log shipper: read a line, transform it, deliver it, repeat."""

import logging

from log_sender.config import Config
from log_sender.file_reader import iter_lines
from log_sender.sender import HTTPSender
from log_sender.transformer import RecordTransformer

logger = logging.getLogger(__name__)


class LogShipper:
    """Reads the log file once and ships every parseable line over HTTP."""

    def __init__(
        self,
        config: Config,
        transformer: RecordTransformer | None = None,
        sender: HTTPSender | None = None,
    ):
        self._config = config
        self._transformer = transformer or RecordTransformer(config)
        self._sender = sender or HTTPSender(config)
        self._sent = 0
        self._failed = 0
        self._skipped = 0

    @property
    def sent(self) -> int:
        return self._sent

    @property
    def failed(self) -> int:
        return self._failed

    @property
    def skipped(self) -> int:
        return self._skipped

    def run(self):
        """Ship the whole file. Raises SourceUnavailable if it cannot be opened."""
        try:
            for line in iter_lines(self._config.log_file):
                self._ship_line(line)
        finally:
            self._sender.close()
            logger.info(
                "Shipper finished: sent=%d, failed=%d, skipped=%d",
                self._sent, self._failed, self._skipped,
            )

    def _ship_line(self, line: str):
        event = self._transformer.transform(line)
        if event is None:
            self._skipped += 1
            return
        if self._sender.send(event):
            self._sent += 1
        else:
            self._failed += 1
