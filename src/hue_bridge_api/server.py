"""HTTP server exposing Hue bridge light control."""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from . import __version__
from .config import ConfigError, ServerConfig, load_config, parse_duration
from .hue_client import AsyncHueClient
from .light_manager import LightManager
from .routes import lights
from .routes.lights import TEXT_MEDIA_TYPE

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


async def check_bridge_connection(config: ServerConfig) -> bool:
    """Test connection to Hue bridge during startup."""
    async with AsyncHueClient(config) as client:
        success = await client.test_connection()
    if success:
        logger.info(f"Successfully connected to Hue bridge at {config.bridge_host}")
    else:
        logger.warning(f"Failed to connect to Hue bridge at {config.bridge_host}")
        logger.warning("Server will start but requests may fail until it is reachable")
    return success


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error handling {request.url.path}: {exc}")
    return PlainTextResponse(
        "An unexpected error occurred", status_code=500, media_type=TEXT_MEDIA_TYPE
    )


def create_app(config: ServerConfig, check_bridge: bool = True) -> FastAPI:
    """Create the API application for ``config``."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if check_bridge:
            await check_bridge_connection(config)
        yield
        logger.info("shutting down")

    app = FastAPI(
        title="Hue Bridge API",
        description="HTTP API forwarding light commands to a Philips Hue bridge",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.light_manager = LightManager(config)
    app.include_router(lights.router)
    app.add_exception_handler(Exception, unexpected_error_handler)

    @app.middleware("http")
    async def request_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), config.request_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Request to {request.url.path} exceeded {config.request_timeout}s"
            )
            return PlainTextResponse(
                "Request timed out.", status_code=503, media_type=TEXT_MEDIA_TYPE
            )

    return app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hue bridge HTTP API")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration (default: server-conf.yml)",
    )
    parser.add_argument(
        "--graceful-timeout",
        type=parse_duration,
        default=None,
        help="the duration for which the server gracefully waits for existing "
        "connections to finish - e.g. 15s, 1m or 500ms",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None):
    """Main entry point for the bridge API server."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logging("INFO")
        logger.critical(str(e))
        sys.exit(1)

    setup_logging(config.log_level)
    graceful_timeout = (
        args.graceful_timeout
        if args.graceful_timeout is not None
        else config.graceful_timeout
    )

    logger.info(f"Serving on {config.host} on port {config.port}")
    logger.info(f"Bridge host: {config.bridge_host}")

    server = uvicorn.Server(
        uvicorn.Config(
            create_app(config),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            timeout_keep_alive=15,
            timeout_graceful_shutdown=max(1, round(graceful_timeout)),
        )
    )

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)
    finally:
        logger.info("Hue bridge API shutdown complete")


if __name__ == "__main__":
    main()
