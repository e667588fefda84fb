"""Request validation and error translation between HTTP input and the bridge.

Every operation takes raw path parameters, validates them, makes at most one
bridge mutation and returns a ``HueResponse`` carrying the HTTP status code
and either the payload or a plain-text diagnostic.

Path parameters are all parsed and range-checked before the bridge is
contacted, so a validation failure never reaches the bridge. The light index
is bounds-checked against the light list fetched afterwards.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from .color import MAX_BRIGHTNESS, RGBA
from .config import ServerConfig
from .hue_client import AsyncHueClient, HueError, HueValidationError

logger = logging.getLogger(__name__)

CONNECT_ERROR = "Could not connect to bridge to get the lights on the network."
INVALID_INDEX = "Index provided is not a valid non-negative integer."
INDEX_OUT_OF_RANGE = "Index provided is out of range of the lights on the network."
INVALID_BRIGHTNESS = "Brightness level is not a valid integer."
BRIGHTNESS_OUT_OF_RANGE = "Brightness level is not between [0-254]."
INVALID_RGB = "RGB value must be three integers separated by '-'."
RGB_OUT_OF_RANGE = "An RGB value provided is not between [0-255]."
BRIGHTNESS_FAILED = "Could not change the brightness on light."
COLOR_FAILED = "Could not change the color on light."


class HueResponse(BaseModel):
    """Outcome of a light operation, ready to be turned into an HTTP response."""

    success: bool
    status_code: int
    message: str = ""
    data: Optional[Union[List[Dict[str, Any]], Dict[str, Any]]] = None

    @classmethod
    def ok(cls, data=None) -> "HueResponse":
        return cls(success=True, status_code=200, data=data)

    @classmethod
    def bad_request(cls, message: str) -> "HueResponse":
        return cls(success=False, status_code=400, message=message)

    @classmethod
    def server_error(cls, message: str) -> "HueResponse":
        return cls(success=False, status_code=500, message=message)


def _parse_int(value: str, message: str) -> int:
    """Parse a strictly decimal integer, raising ``HueValidationError`` otherwise."""
    text = value.strip() if isinstance(value, str) else ""
    digits = text[1:] if text[:1] in ("-", "+") else text
    if not digits.isdigit() or not digits.isascii():
        raise HueValidationError(message)
    return int(text)


def parse_index(value: str) -> int:
    """Parse a light index. Bounds are checked against the light list later."""
    index = _parse_int(value, INVALID_INDEX)
    if index < 0:
        raise HueValidationError(INVALID_INDEX)
    return index


def parse_brightness(value: str) -> int:
    level = _parse_int(value, INVALID_BRIGHTNESS)
    if level < 0 or level > MAX_BRIGHTNESS:
        raise HueValidationError(BRIGHTNESS_OUT_OF_RANGE)
    return level


def parse_rgb(value: str) -> RGBA:
    """Parse an ``R-G-B`` string into an opaque ``RGBA``.

    Raises:
        HueValidationError: wrong segment count, non-numeric segment, or a
            component outside [0, 255].
    """
    segments = value.split("-") if isinstance(value, str) else []
    if len(segments) != 3:
        raise HueValidationError(INVALID_RGB)

    components = [_parse_int(segment, INVALID_RGB) for segment in segments]
    if any(component < 0 or component > 255 for component in components):
        raise HueValidationError(RGB_OUT_OF_RANGE)

    r, g, b = components
    return RGBA(r=r, g=g, b=b, a=255)


class LightManager:
    """Validates light requests and forwards them to the Hue bridge."""

    def __init__(self, config: ServerConfig):
        self.config = config

    def _client(self) -> AsyncHueClient:
        return AsyncHueClient(self.config)

    @staticmethod
    def _resolve(lights: List[Dict[str, Any]], index: int) -> Dict[str, Any]:
        if index >= len(lights):
            raise HueValidationError(INDEX_OUT_OF_RANGE)
        return lights[index]

    async def list_lights(self) -> HueResponse:
        """List all lights known to the bridge."""
        try:
            async with self._client() as client:
                lights = await client.get_lights()
        except HueError as e:
            logger.error(f"Failed to list lights: {e}")
            return HueResponse.server_error(CONNECT_ERROR)

        logger.info(f"Retrieved {len(lights)} lights")
        return HueResponse.ok(lights)

    async def get_light(self, index_param: str) -> HueResponse:
        """Get the light at position ``index_param`` in the light list."""
        try:
            index = parse_index(index_param)
        except HueValidationError as e:
            return HueResponse.bad_request(str(e))

        try:
            async with self._client() as client:
                lights = await client.get_lights()
        except HueError as e:
            logger.error(f"Failed to get light {index}: {e}")
            return HueResponse.server_error(CONNECT_ERROR)

        try:
            light = self._resolve(lights, index)
        except HueValidationError as e:
            return HueResponse.bad_request(str(e))

        return HueResponse.ok(light)

    async def set_brightness(self, index_param: str, level_param: str) -> HueResponse:
        """Set the brightness of the light at position ``index_param``."""
        try:
            index = parse_index(index_param)
            level = parse_brightness(level_param)
        except HueValidationError as e:
            return HueResponse.bad_request(str(e))

        async with self._client() as client:
            try:
                lights = await client.get_lights()
            except HueError as e:
                logger.error(f"Failed to get lights for brightness change: {e}")
                return HueResponse.server_error(CONNECT_ERROR)

            try:
                light = self._resolve(lights, index)
            except HueValidationError as e:
                return HueResponse.bad_request(str(e))

            try:
                await client.set_brightness(light["id"], level)
            except HueError as e:
                logger.error(f"Failed to set brightness on light {light['id']}: {e}")
                return HueResponse.server_error(BRIGHTNESS_FAILED)

        logger.info(f"Set brightness of light {light['id']} to {level}")
        return HueResponse.ok()

    async def set_color(self, index_param: str, rgb_param: str) -> HueResponse:
        """Set the color of the light at position ``index_param``."""
        try:
            index = parse_index(index_param)
            color = parse_rgb(rgb_param)
        except HueValidationError as e:
            return HueResponse.bad_request(str(e))

        async with self._client() as client:
            try:
                lights = await client.get_lights()
            except HueError as e:
                logger.error(f"Failed to get lights for color change: {e}")
                return HueResponse.server_error(CONNECT_ERROR)

            try:
                light = self._resolve(lights, index)
            except HueValidationError as e:
                return HueResponse.bad_request(str(e))

            try:
                await client.set_color(light["id"], color)
            except HueError as e:
                logger.error(f"Failed to set color on light {light['id']}: {e}")
                return HueResponse.server_error(COLOR_FAILED)

        logger.info(
            f"Set color of light {light['id']} to ({color.r}, {color.g}, {color.b})"
        )
        return HueResponse.ok()
