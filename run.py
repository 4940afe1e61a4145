#!/usr/bin/env python3
"""
Run the Rent Fairness Engine web server.
"""

import logging

import uvicorn

from utils.config import Config


def configure_logging(level: str) -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Start the web server."""
    config = Config.load()
    configure_logging(config.log_level)

    logger = logging.getLogger("run")
    logger.info("Starting Rent Fairness Engine on http://%s:%s", config.host, config.port)
    logger.info("Property store: %s", config.property_store)

    uvicorn.run(
        "web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
