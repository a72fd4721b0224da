#!/usr/bin/env python3
"""
Main entry point for the QuickLink service.

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - file, memory or redis (default file)
    STORAGE_PATH - JSON file for the file backend
    STORAGE_KEY - Key holding the link collection (default urls)
    REDIS_URL - Redis connection URL for the redis backend
    BASE_URL - Fallback origin for short links
    ROUTE_PREFIX - Segment between origin and code (default '#')
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from quicklink.storage import create_storage
from quicklink.link_store import LinkStore
from quicklink.service import ShortenerService
from quicklink.shortcode import ShortCodeGenerator
from quicklink.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger: logging.Logger) -> ShortenerService:
    """Wire storage, store and service from configuration."""
    storage = create_storage(
        config.storage_backend,
        path=config.storage_path,
        key=config.storage_key,
        redis_url=config.redis_url,
        logger=logger,
    )
    store = LinkStore(
        storage=storage,
        origin=config.base_url,
        route_prefix=config.route_prefix,
        generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
    )
    return ShortenerService(
        store=store,
        logger=logger,
        default_validity_minutes=config.default_validity_minutes,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting QuickLink with {config.storage_backend} storage...")

    service = build_service(config, logger)

    app.state.storage = service.store.storage
    app.state.store = service.store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down QuickLink...")
    service.close()
    logger.info("Service stopped")


def create_application(config: Optional[Config] = None) -> FastAPI:
    """Build the app with its lifespan; storage is opened on startup.

    Worker processes import this by name, so it must work without
    arguments.
    """
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    # Instances are created in lifespan
    app = create_app(
        storage_instance=None,
        store_instance=None,
        service_instance=None,
        config=config,
    )

    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()
    app = create_application(config)
    logger = app.state.logger

    logger.info("QuickLink")
    logger.info(f"Configuration: {config.model_dump()}")

    if config.workers > 1:
        # uvicorn only spawns workers for an import string; it installs its
        # own signal handling in the supervisor
        logger.info(
            f"Starting {config.workers} workers on {config.host}:{config.port}"
        )
        uvicorn.run(
            "app:create_application",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
