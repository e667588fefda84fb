"""Async Hue bridge client for the light calls used by the API."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import httpx

from .color import RGBA, rgb_to_xy
from .config import ServerConfig

logger = logging.getLogger(__name__)


class HueError(Exception):
    """Base exception for all Hue-related errors."""

    pass


class HueConnectionError(HueError):
    """Network/connection related errors."""

    pass


class HueTimeoutError(HueError):
    """Request timeout errors."""

    pass


class HueValidationError(HueError):
    """Parameter validation errors."""

    pass


class AsyncHueClient:
    """Async HTTP client for a single Hue bridge.

    No retries are made; every failure surfaces as a ``HueError``.
    """

    def __init__(self, config: ServerConfig):
        self.base_url = config.base_url
        self.timeout = httpx.Timeout(
            connect=config.timeout_connect,
            read=config.timeout_read,
            write=5.0,
            pool=5.0,
        )
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @asynccontextmanager
    async def _get_client(self):
        """Get HTTP client (context manager for standalone usage)."""
        if self._client:
            yield self._client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    async def _safe_request(
        self,
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a request to the Hue API and unwrap its error envelope."""
        try:
            async with self._get_client() as client:
                if method.upper() == "GET":
                    response = await client.get(endpoint)
                elif method.upper() == "PUT":
                    response = await client.put(endpoint, json=data)
                else:
                    raise ValueError(f"Unsupported method: {method}")

                if response.status_code == 404:
                    raise HueValidationError(f"Resource not found: {endpoint}")
                elif response.status_code == 401:
                    raise HueConnectionError("Invalid username/authentication")

                response.raise_for_status()
                result = response.json()

        except httpx.TimeoutException as e:
            raise HueTimeoutError(f"Request to bridge timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise HueConnectionError(
                f"Bridge returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise HueConnectionError(f"Request to bridge failed: {e}") from e
        except httpx.InvalidURL as e:
            raise HueConnectionError(f"Invalid bridge address: {e}") from e
        except ValueError as e:
            raise HueError(f"Invalid response from bridge: {e}") from e

        # The bridge reports errors inside a 200 response as a list of
        # {"error": {...}} objects, for GET and PUT alike.
        if isinstance(result, list):
            errors = [
                item["error"]
                for item in result
                if isinstance(item, dict) and "error" in item
            ]
            if errors:
                descriptions = ", ".join(
                    error.get("description", "Unknown error") for error in errors
                )
                raise HueError(f"Hue API error: {descriptions}")

        return result

    async def get_lights(self) -> List[Dict[str, Any]]:
        """Get all lights from the bridge, ordered by ascending light id.

        Each light is the bridge's own representation with its id added
        under ``"id"``.
        """
        endpoint = f"{self.base_url}/lights"
        result = await self._safe_request(endpoint, "GET")
        if not isinstance(result, dict):
            raise HueError("Unexpected lights response from bridge")

        lights = []
        for light_id in sorted(result, key=_light_sort_key):
            light = dict(result[light_id])
            light["id"] = int(light_id) if light_id.isdigit() else light_id
            lights.append(light)
        return lights

    async def set_light_state(
        self, light_id: int, state: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Update the state of a specific light."""
        endpoint = f"{self.base_url}/lights/{light_id}/state"
        return await self._safe_request(endpoint, "PUT", state)

    async def set_brightness(self, light_id: int, brightness: int) -> List[Dict[str, Any]]:
        """Turn a light on at the given brightness (0-254)."""
        return await self.set_light_state(light_id, {"on": True, "bri": brightness})

    async def set_color(self, light_id: int, color: RGBA) -> List[Dict[str, Any]]:
        """Turn a light on with the given color."""
        xy, brightness = rgb_to_xy(color)
        return await self.set_light_state(
            light_id, {"on": True, "xy": xy, "bri": brightness}
        )

    async def get_config(self) -> Dict[str, Any]:
        """Get bridge configuration."""
        endpoint = f"{self.base_url}/config"
        return await self._safe_request(endpoint, "GET")

    async def test_connection(self) -> bool:
        """Test connection to the bridge."""
        try:
            await self.get_config()
            logger.info("Successfully connected to Hue bridge")
            return True
        except HueError as e:
            logger.error(f"Failed to connect to Hue bridge: {e}")
            return False


def _light_sort_key(light_id: str):
    return (0, int(light_id), "") if light_id.isdigit() else (1, 0, light_id)
