"""Hue Bridge API - HTTP API forwarding light commands to a Philips Hue bridge."""

__version__ = "1.0.0"
__description__ = "HTTP API for listing Hue lights and setting their brightness and color"

from .color import RGBA, rgb_to_xy
from .config import ConfigError, ServerConfig, StaticServerConfig, load_config
from .hue_client import (
    AsyncHueClient,
    HueConnectionError,
    HueError,
    HueTimeoutError,
    HueValidationError,
)
from .light_manager import HueResponse, LightManager

__all__ = [
    "RGBA",
    "rgb_to_xy",
    "ConfigError",
    "ServerConfig",
    "StaticServerConfig",
    "load_config",
    "AsyncHueClient",
    "HueError",
    "HueConnectionError",
    "HueTimeoutError",
    "HueValidationError",
    "HueResponse",
    "LightManager",
]
