"""Entry point for the log sender."""

import logging
import sys

from log_sender.config import load_config
from log_sender.errors import ConfigError, SourceUnavailable
from log_sender.shipper import LogShipper


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    try:
        config = load_config()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)
    logging.getLogger().setLevel(config.log_level.upper())

    logger.info("Starting log sender: file=%s, endpoint=%s, timezone=%s",
                config.log_file, config.api_url, config.timezone)
    if not config.authorization:
        logger.warning("No authorization configured, sending without Authorization header")

    shipper = LogShipper(config)
    try:
        shipper.run()
    except SourceUnavailable as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
