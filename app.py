#!/usr/bin/env python3
"""
Main entry point for the madlib short-link service.

Concurrency: requests are served with async I/O (FastAPI + redis.asyncio).
With REDIS_URL unset records live in process memory, so keep WORKERS at 1.

Usage:
    python app.py

Environment variables:
    REDIS_URL - Redis connection URL (in-memory store if unset)
    BASE_URL - Public base URL for short links (request origin if unset)
    FORWARDED_ALLOW_IPS - Proxies trusted for X-Forwarded-* headers
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    SHORT_CODE_LENGTH - Length of generated codes (default 6)
    MAX_COLLISION_RETRIES - Attempts before giving up on a free code (default 10)
    RETENTION_SECONDS - Record lifetime (default one year)
    LOG_LEVEL - Logging level
    LOG_COMPONENT_LEVELS - JSON map of per-component levels, e.g. {"codec": "DEBUG"}
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from madlib_links.database import MemoryKeyValueStore, RedisKeyValueStore
from madlib_links.store import ShortLinkStore
from madlib_links.shortcode import ShortCodeGenerator
from madlib_links.common.logging_config import component_logger, setup_logging
from madlib_web import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting madlib short-link service...")

    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        kv = RedisKeyValueStore(redis_url=config.redis_url, logger=component_logger("database", logger))
        await kv.connect()
    else:
        logger.warning("REDIS_URL not set - short links are kept in memory only")
        kv = MemoryKeyValueStore(logger=component_logger("database", logger))

    store = ShortLinkStore(
        kv=kv,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=component_logger("store", logger),
        max_attempts=config.max_collision_retries,
        retention_seconds=config.retention_seconds,
    )
    app.state.store = store

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down madlib short-link service...")
    await store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
        component_levels=config.log_component_levels,
    )

    logger.info("Madlib Short-Link Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Store is created in lifespan
    app = create_app(store_instance=None, config=config, logger=logger)
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        proxy_headers=True,
        forwarded_allow_ips=config.forwarded_allow_ips,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
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
