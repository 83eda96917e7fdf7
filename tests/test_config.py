"""Tests for config module."""

from datetime import timezone

import pytest
import yaml

from log_sender.config import (
    DEFAULT_API_URL,
    Config,
    load_config,
    load_yaml_config,
    resolve_timezone,
)
from log_sender.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LOG_FILE", "API_URL", "API_AUTHORIZATION", "REQUEST_TIMEOUT",
        "LOG_TIMEZONE", "EVENT_DOMAIN", "EVENT_MIRROR", "EVENT_DEFAULT_ACTION",
        "EVENT_USER_AGENT", "EVENT_LOCATION", "LOG_LEVEL", "CONFIG_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.log_file == "server.log"
        assert cfg.api_url == DEFAULT_API_URL
        assert cfg.authorization == ""
        assert cfg.timeout == 1.0
        assert cfg.timezone == "UTC"
        assert cfg.domain == "test.smartsign.com.vn"
        assert cfg.mirror == "0"
        assert cfg.default_action == "log"
        assert cfg.location == "HCMC"
        assert "Chrome/120.0.0.0" in cfg.user_agent

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(AttributeError):
            cfg.timeout = 5.0

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ConfigError):
            Config(timeout=0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -1.0])
    def test_rejects_non_finite_or_negative_timeout(self, value):
        with pytest.raises(ConfigError):
            Config(timeout=value)

    def test_rejects_unknown_timezone(self):
        with pytest.raises(ConfigError):
            Config(timezone="Mars/Olympus_Mons")

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ConfigError):
            Config(log_level="CHATTY")


class TestResolveTimezone:
    def test_utc(self):
        assert resolve_timezone("UTC") is timezone.utc
        assert resolve_timezone("utc") is timezone.utc

    def test_local_is_none(self):
        assert resolve_timezone("local") is None
        assert resolve_timezone("LOCAL") is None


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yml")) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError):
            load_yaml_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_yaml_config(str(path))


class TestLoadConfigCLI:
    def test_cli_overrides(self):
        argv = [
            "/tmp/app.log",
            "--api-url", "http://127.0.0.1:9428/insert/jsonline",
            "--authorization", "Basic abc",
            "--timeout", "2.5",
            "--timezone", "local",
            "--domain", "example.org",
            "--location", "HN",
        ]
        cfg = load_config(argv)
        assert cfg.log_file == "/tmp/app.log"
        assert cfg.api_url == "http://127.0.0.1:9428/insert/jsonline"
        assert cfg.authorization == "Basic abc"
        assert cfg.timeout == 2.5
        assert cfg.timezone == "local"
        assert cfg.domain == "example.org"
        assert cfg.location == "HN"

    def test_empty_argv(self):
        cfg = load_config([])
        assert cfg == Config()


class TestLoadConfigLayers:
    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({"log_file": "from-yaml.log", "mirror": 1, "timeout": 3}))
        cfg = load_config(["--config", str(path)])
        assert cfg.log_file == "from-yaml.log"
        assert cfg.mirror == "1"
        assert cfg.timeout == 3.0

    def test_unknown_yaml_key_ignored(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({"retries": 5}))
        cfg = load_config(["--config", str(path)])
        assert cfg == Config()

    def test_env_over_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({"domain": "yaml.example"}))
        monkeypatch.setenv("CONFIG_PATH", str(path))
        monkeypatch.setenv("EVENT_DOMAIN", "env.example")
        monkeypatch.setenv("REQUEST_TIMEOUT", "0.5")
        cfg = load_config([])
        assert cfg.domain == "env.example"
        assert cfg.timeout == 0.5

    def test_cli_over_env(self, monkeypatch):
        monkeypatch.setenv("LOG_FILE", "/env/app.log")
        monkeypatch.setenv("API_AUTHORIZATION", "Basic env")
        cfg = load_config(["/cli/app.log", "--authorization", "Basic cli"])
        assert cfg.log_file == "/cli/app.log"
        assert cfg.authorization == "Basic cli"

    def test_nan_timeout_env(self, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT", "nan")
        with pytest.raises(ConfigError):
            load_config([])

    def test_bad_timeout_env(self, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            load_config([])
