"""Configuration module: frozen dataclass loaded from YAML, env vars and CLI args."""

import argparse
import logging
import math
import os
import sys
from dataclasses import dataclass, fields
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from log_sender.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = (
    "http://10.0.0.8:9428/insert/jsonline?_time_field=time&_msg_field=message"
)
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0.0.0"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_timezone(name: str) -> tzinfo | None:
    """Map a timezone setting to a tzinfo. ``local`` maps to None (process local zone)."""
    if name.strip().lower() == "local":
        return None
    if name.strip().upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e


@dataclass(frozen=True)
class Config:
    log_file: str = "server.log"
    api_url: str = DEFAULT_API_URL
    authorization: str = ""  # empty means no Authorization header
    timeout: float = 1.0
    timezone: str = "UTC"  # "UTC", "local" or an IANA zone name
    domain: str = "test.smartsign.com.vn"
    mirror: str = "0"
    default_action: str = "log"
    user_agent: str = DEFAULT_USER_AGENT
    location: str = "HCMC"
    log_level: str = "INFO"

    def __post_init__(self):
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f"timeout must be a positive number, got {self.timeout}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level!r}")
        resolve_timezone(self.timezone)


_FIELD_NAMES = {f.name for f in fields(Config)}

_ENV_VARS = {
    "log_file": "LOG_FILE",
    "api_url": "API_URL",
    "authorization": "API_AUTHORIZATION",
    "timeout": "REQUEST_TIMEOUT",
    "timezone": "LOG_TIMEZONE",
    "domain": "EVENT_DOMAIN",
    "mirror": "EVENT_MIRROR",
    "default_action": "EVENT_DEFAULT_ACTION",
    "user_agent": "EVENT_USER_AGENT",
    "location": "EVENT_LOCATION",
    "log_level": "LOG_LEVEL",
}

_CLI_KEYS = (
    "log_file", "api_url", "authorization", "timeout",
    "timezone", "domain", "location", "log_level",
)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-sender",
        description="Parse a structured application log and forward each record over HTTP.",
    )
    parser.add_argument(
        "log_file", nargs="?", default=None,
        help="Log file to read (default: server.log)",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--api-url", dest="api_url", default=None,
                        help="Ingestion endpoint URL")
    parser.add_argument("--authorization", default=None,
                        help="Value of the Authorization header")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Per-request timeout in seconds (default: 1.0)")
    parser.add_argument("--timezone", default=None,
                        help="Zone of the log timestamps: UTC, local or an IANA name")
    parser.add_argument("--domain", default=None, help="Value of the domain field")
    parser.add_argument("--location", default=None, help="Value of the location field")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        choices=_LOG_LEVELS, help="Diagnostic log level")
    return parser


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _coerce(kwargs: dict) -> dict:
    result = {}
    for key, value in kwargs.items():
        if value is None:
            continue
        if key == "timeout":
            try:
                result[key] = float(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"timeout must be a number, got {value!r}") from e
        else:
            result[key] = str(value)
    return result


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority)."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_cli_parser().parse_args(argv)

    kwargs: dict = {}
    yaml_data = load_yaml_config(args.config or os.environ.get("CONFIG_PATH"))
    for key, value in yaml_data.items():
        if key not in _FIELD_NAMES:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        kwargs[key] = value

    for key, env_name in _ENV_VARS.items():
        if env_name in os.environ:
            kwargs[key] = os.environ[env_name]

    for key in _CLI_KEYS:
        value = getattr(args, key)
        if value is not None:
            kwargs[key] = value

    return Config(**_coerce(kwargs))
