"""Static file server for the web frontend."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import ConfigError, StaticServerConfig, load_static_config
from .server import setup_logging

logger = logging.getLogger(__name__)


def create_static_app(config: StaticServerConfig) -> FastAPI:
    """Create an app serving ``config.directory`` at ``/``.

    Raises:
        ConfigError: the directory does not exist.
    """
    directory = Path(config.directory)
    if not directory.is_dir():
        raise ConfigError(f"Static directory {directory} does not exist.")

    app = FastAPI(
        title="Hue Frontend", docs_url=None, redoc_url=None, openapi_url=None
    )
    app.mount("/", StaticFiles(directory=directory, html=True), name="static")
    return app


def main(argv: Optional[list] = None):
    """Main entry point for the static file server."""
    parser = argparse.ArgumentParser(description="Hue frontend static file server")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration (default: server_conf.yml)",
    )
    args = parser.parse_args(argv)

    try:
        config = load_static_config(args.config)
        app = create_static_app(config)
    except ConfigError as e:
        setup_logging("INFO")
        logger.critical(str(e))
        sys.exit(1)

    setup_logging(config.log_level)
    logger.info(f"Listening on host {config.host} on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
