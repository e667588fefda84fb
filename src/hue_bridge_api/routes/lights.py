"""Light routes: list, read, set brightness and set color."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.convertors import Convertor, register_url_convertor

from ..light_manager import HueResponse, LightManager

logger = logging.getLogger(__name__)

TEXT_MEDIA_TYPE = "application/text"


class DigitsConvertor(Convertor):
    """Path segment made of decimal digits, kept as a string."""

    regex = "[0-9]+"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value) -> str:
        return str(value)


class RGBConvertor(Convertor):
    """Path segment made of digits and hyphens, e.g. ``255-0-128``."""

    regex = "[-0-9]+"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value) -> str:
        return str(value)


register_url_convertor("digits", DigitsConvertor())
register_url_convertor("rgb", RGBConvertor())

router = APIRouter(prefix="/api/lights")


def get_light_manager(request: Request) -> LightManager:
    return request.app.state.light_manager


def to_http(result: HueResponse) -> Response:
    """Turn a ``HueResponse`` into the HTTP response sent to the caller."""
    if not result.success:
        return PlainTextResponse(
            result.message, status_code=result.status_code, media_type=TEXT_MEDIA_TYPE
        )
    if result.data is None:
        return Response(status_code=result.status_code)
    return JSONResponse(result.data, status_code=result.status_code)


@router.get("/")
async def list_lights(manager: LightManager = Depends(get_light_manager)) -> Response:
    """List all lights on the bridge."""
    return to_http(await manager.list_lights())


@router.get("/{index:digits}")
async def get_light(
    index: str, manager: LightManager = Depends(get_light_manager)
) -> Response:
    """Get the light at a position in the bridge's light list."""
    return to_http(await manager.get_light(index))


@router.get("/{index:digits}/brightness/{level:digits}")
async def set_brightness(
    index: str, level: str, manager: LightManager = Depends(get_light_manager)
) -> Response:
    """Set a light's brightness (0-254)."""
    result = await manager.set_brightness(index, level)
    logger.debug(f"Brightness request for light {index}: {result.status_code}")
    return to_http(result)


@router.get("/{index:digits}/color/{rgb:rgb}")
async def set_color(
    index: str, rgb: str, manager: LightManager = Depends(get_light_manager)
) -> Response:
    """Set a light's color from an ``R-G-B`` triple."""
    result = await manager.set_color(index, rgb)
    logger.debug(f"Color request for light {index}: {result.status_code}")
    return to_http(result)
