"""Configuration management for the Hue bridge API and static server."""

import os
from pathlib import Path
from typing import Any, Dict, Union

import httpx
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

load_dotenv()

DEFAULT_CONFIG_PATH = "server-conf.yml"
DEFAULT_STATIC_CONFIG_PATH = "server_conf.yml"


class ConfigError(Exception):
    """Configuration file could not be read, parsed or validated."""

    pass


def _validate_log_level(v: str) -> str:
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if v.upper() not in valid_levels:
        raise ValueError(f"Log level must be one of: {valid_levels}")
    return v.upper()


class ServerConfig(BaseModel):
    """Configuration for the bridge API server."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(alias="server-host", description="Interface to bind to")
    port: int = Field(alias="server-port", ge=1, le=65535, description="Port to bind to")
    bridge_host: str = Field(alias="bridge-host", description="Host of the Hue bridge")
    bridge_id: str = Field(alias="bridge-id", description="Hue bridge username")
    log_level: str = Field(default="INFO", alias="log-level", description="Logging level")
    timeout_connect: float = Field(
        default=5.0,
        ge=1.0,
        le=30.0,
        alias="bridge-timeout-connect",
        description="Connection timeout in seconds",
    )
    timeout_read: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        alias="bridge-timeout-read",
        description="Read timeout in seconds",
    )
    graceful_timeout: float = Field(
        default=15.0,
        ge=0.0,
        alias="graceful-timeout",
        description="Seconds to wait for in-flight requests on shutdown",
    )
    request_timeout: float = Field(
        default=15.0,
        gt=0.0,
        alias="request-timeout",
        description="Seconds a single request may take before it is abandoned",
    )

    @field_validator("host", "bridge_host")
    @classmethod
    def validate_host(cls, v):
        """Validate host is not blank."""
        if not v or not v.strip():
            raise ValueError("Host must not be empty")
        return v.strip()

    @field_validator("bridge_host")
    @classmethod
    def validate_bridge_host(cls, v):
        """Validate the bridge host forms a usable URL."""
        try:
            httpx.URL(f"http://{v}/")
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid bridge host: {v}") from e
        return v

    @field_validator("bridge_id")
    @classmethod
    def validate_bridge_id(cls, v):
        """Validate bridge username format."""
        if not v or len(v) < 10:
            raise ValueError("Bridge id must be at least 10 characters long")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        return _validate_log_level(v)

    @property
    def base_url(self) -> str:
        """Get the base URL for Hue API."""
        return f"http://{self.bridge_host}/api/{self.bridge_id}"


class StaticServerConfig(BaseModel):
    """Configuration for the static frontend server."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(alias="server-host")
    port: int = Field(alias="server-port", ge=1, le=65535)
    directory: str = Field(default="../static", alias="static-dir")
    log_level: str = Field(default="INFO", alias="log-level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        return _validate_log_level(v)


def read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML mapping from ``path``.

    Raises:
        ConfigError: the file is missing, unreadable, or not a YAML mapping.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read {path} file.") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path} file.") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Could not parse {path} file.")
    return data


def load_config(path: Union[str, Path, None] = None) -> ServerConfig:
    """Load the bridge API configuration.

    The path defaults to ``HUE_API_CONFIG`` from the environment (or ``.env``),
    then to ``server-conf.yml`` in the working directory.
    """
    path = path or os.getenv("HUE_API_CONFIG", DEFAULT_CONFIG_PATH)
    data = read_yaml(path)
    if os.getenv("LOG_LEVEL"):
        data["log-level"] = os.getenv("LOG_LEVEL")
    try:
        return ServerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def load_static_config(path: Union[str, Path, None] = None) -> StaticServerConfig:
    """Load the static server configuration."""
    path = path or os.getenv("HUE_STATIC_CONFIG", DEFAULT_STATIC_CONFIG_PATH)
    data = read_yaml(path)
    try:
        return StaticServerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def parse_duration(value: Union[str, float, int]) -> float:
    """Parse a Go-style duration such as ``15s``, ``1m30s`` or ``250us`` into seconds.

    Bare numbers are taken as seconds.
    """
    if isinstance(value, (int, float)):
        return float(value)

    text = value.strip().lower()
    try:
        return float(text)
    except ValueError:
        pass

    units = {
        "ns": 1e-9,
        "us": 1e-6,
        "\u00b5s": 1e-6,
        "\u03bcs": 1e-6,
        "ms": 0.001,
        "s": 1.0,
        "m": 60.0,
        "h": 3600.0,
    }
    total = 0.0
    number = ""
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isdigit() or ch == ".":
            number += ch
            i += 1
            continue
        unit = text[i : i + 2] if text[i : i + 2] in units else ch
        if unit not in units or not number:
            raise ValueError(f"Invalid duration: {value!r}")
        total += float(number) * units[unit]
        number = ""
        i += len(unit)

    if number or not text:
        raise ValueError(f"Invalid duration: {value!r}")
    return total
