"""Tests for configuration loading."""

import pytest

from hue_bridge_api.config import (
    ConfigError,
    ServerConfig,
    load_config,
    load_static_config,
    parse_duration,
)

VALID_CONFIG = """\
server-host: 0.0.0.0
server-port: "8080"
bridge-host: 192.168.1.64
bridge-id: abcdefghij0123456789
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "server-conf.yml"
    path.write_text(VALID_CONFIG)
    return path


class TestLoadConfig:
    """Test loading the bridge API configuration."""

    def test_load_valid_config(self, config_file, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        config = load_config(config_file)

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.bridge_host == "192.168.1.64"
        assert config.bridge_id == "abcdefghij0123456789"
        assert config.log_level == "INFO"
        assert config.graceful_timeout == 15.0
        assert config.base_url == "http://192.168.1.64/api/abcdefghij0123456789"

    def test_config_from_environment_path(self, config_file, monkeypatch):
        monkeypatch.setenv("HUE_API_CONFIG", str(config_file))

        assert load_config().port == 8080

    def test_log_level_environment_override(self, config_file, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert load_config(config_file).log_level == "DEBUG"

    def test_config_is_immutable(self, config_file):
        config = load_config(config_file)

        with pytest.raises(Exception):
            config.port = 9000

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not read"):
            load_config(tmp_path / "missing.yml")

    def test_unparsable_file(self, tmp_path):
        path = tmp_path / "server-conf.yml"
        path.write_text("server-host: [unclosed\n")

        with pytest.raises(ConfigError, match="Could not parse"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "server-conf.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="Could not parse"):
            load_config(path)

    def test_missing_key(self, tmp_path):
        path = tmp_path / "server-conf.yml"
        path.write_text("server-host: 0.0.0.0\nserver-port: 8080\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_short_bridge_id(self):
        with pytest.raises(Exception):
            ServerConfig.model_validate(
                {
                    "server-host": "0.0.0.0",
                    "server-port": 8080,
                    "bridge-host": "hue.local",
                    "bridge-id": "short",
                }
            )

    @pytest.mark.parametrize("bridge_host", ["192.168.1.64:abc", "hue.local:port"])
    def test_unusable_bridge_host(self, tmp_path, bridge_host):
        path = tmp_path / "server-conf.yml"
        path.write_text(VALID_CONFIG.replace("192.168.1.64", f"'{bridge_host}'"))

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_bridge_host_with_port(self, tmp_path):
        path = tmp_path / "server-conf.yml"
        path.write_text(VALID_CONFIG.replace("192.168.1.64", "192.168.1.64:8080"))

        assert load_config(path).base_url.startswith("http://192.168.1.64:8080/api/")

    def test_optional_keys(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        path = tmp_path / "server-conf.yml"
        path.write_text(
            VALID_CONFIG
            + "log-level: warning\nbridge-timeout-read: 20\ngraceful-timeout: 30\n"
        )

        config = load_config(path)

        assert config.log_level == "WARNING"
        assert config.timeout_read == 20.0
        assert config.graceful_timeout == 30.0


class TestLoadStaticConfig:
    """Test loading the static server configuration."""

    def test_load_static_config(self, tmp_path):
        path = tmp_path / "server_conf.yml"
        path.write_text("server-host: 127.0.0.1\nserver-port: 8000\nstatic-dir: web\n")

        config = load_static_config(path)

        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.directory == "web"

    def test_static_dir_default(self, tmp_path):
        path = tmp_path / "server_conf.yml"
        path.write_text("server-host: 127.0.0.1\nserver-port: 8000\n")

        assert load_static_config(path).directory == "../static"

    def test_invalid_port(self, tmp_path):
        path = tmp_path / "server_conf.yml"
        path.write_text("server-host: 127.0.0.1\nserver-port: 99999\n")

        with pytest.raises(ConfigError):
            load_static_config(path)


class TestParseDuration:
    """Test Go-style duration parsing for the graceful timeout flag."""

    @pytest.mark.parametrize(
        "value,expected",
        [("15s", 15.0), ("1m", 60.0), ("1m30s", 90.0), ("500ms", 0.5), ("10", 10.0), (5, 5.0),
         ("250us", 0.00025), ("250\u00b5s", 0.00025), ("100ns", 1e-7), ("1h2m", 3720.0)],
    )
    def test_valid_durations(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "abc", "10x", "s", "1m30"])
    def test_invalid_durations(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)
