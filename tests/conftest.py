"""Pytest configuration and fixtures for Hue bridge API tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from hue_bridge_api.config import ServerConfig


@pytest.fixture
def server_config():
    """Bridge API configuration used across tests."""
    return ServerConfig.model_validate(
        {
            "server-host": "127.0.0.1",
            "server-port": "8080",
            "bridge-host": "192.168.1.64",
            "bridge-id": "test_username_0123456789",
        }
    )


@pytest.fixture
def mock_hue_response_success():
    """Mock successful Hue API response."""
    return [{"success": {"/lights/1/state/bri": 200}}]


@pytest.fixture
def mock_hue_response_error():
    """Mock error Hue API response."""
    return [{
        "error": {
            "type": 201,
            "address": "/lights/1/state/bri",
            "description": "parameter, bri, is not modifiable. Device is set to off."
        }
    }]


@pytest.fixture
def mock_lights_response():
    """Mock response for listing all lights, keyed by bridge light id."""
    return {
        "3": {
            "name": "Hallway",
            "state": {"on": False, "bri": 50, "reachable": True},
            "type": "Dimmable light"
        },
        "1": {
            "name": "Living Room Light",
            "state": {"on": True, "bri": 200, "xy": [0.3, 0.3], "reachable": True},
            "type": "Extended color light"
        },
        "2": {
            "name": "Kitchen Light",
            "state": {"on": False, "bri": 100, "ct": 300, "reachable": True},
            "type": "Color temperature light"
        }
    }


@pytest.fixture
def lights(mock_lights_response):
    """Lights as returned by AsyncHueClient.get_lights."""
    return [
        dict(mock_lights_response[light_id], id=int(light_id))
        for light_id in ("1", "2", "3")
    ]


@pytest.fixture
def mock_bridge_config():
    """Mock bridge configuration response."""
    return {
        "name": "Test Bridge",
        "swversion": "1.50.1963220030",
        "apiversion": "1.50.0",
        "mac": "00:17:88:01:02:03",
        "bridgeid": "001788FFFE010203",
        "modelid": "BSB002"
    }


@pytest.fixture
def mock_httpx_client():
    """Patch httpx.AsyncClient in the client module and return the inner mock client."""
    with patch('hue_bridge_api.hue_client.httpx.AsyncClient') as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None
        yield mock_client


@pytest.fixture
def make_response():
    """Factory for mock httpx.Response objects returning a payload."""
    def _make(payload, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        return response
    return _make


@pytest.fixture
def mock_hue_client(lights):
    """Patch AsyncHueClient in the manager module and return the client mock."""
    with patch('hue_bridge_api.light_manager.AsyncHueClient') as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get_lights.return_value = lights
        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None
        yield mock_client
