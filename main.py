"""
Synapse Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload

Configuration comes from SYNAPSE_* environment variables (and .env), layered
over the YAML file named by SYNAPSE_CONFIG_FILE when set.
"""

import os

import uvicorn

from synapse.config import load_config
from synapse.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def run() -> None:
    config = load_config()
    setup_logging(config.logging)

    # Reload only in development
    is_dev = os.getenv("ENVIRONMENT", "development") == "development"
    logger.info(f"Serving Synapse on {config.server.host}:{config.server.port} (reload={is_dev})")

    uvicorn.run(
        "app:app",
        host=config.server.host,
        port=config.server.port,
        reload=is_dev,
        log_level=config.logging.level.lower(),
        # Logging is owned by loguru; see setup_logging
        log_config=None,
    )


if __name__ == "__main__":
    run()
