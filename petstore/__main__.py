"""Run the pet catalog HTTP service: ``python -m petstore``."""

import logging

import uvicorn

from petstore.infrastructure.config import get_config
from petstore.infrastructure.logging import setup_logging
from petstore.interfaces.http import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()
    setup_logging(level=config.log_level, format_type=config.log_format)
    logger.info(
        f"Starting petstore ({config.environment}) on {config.http_host}:{config.http_port}"
    )
    app = create_app(config=config)
    uvicorn.run(app, host=config.http_host, port=config.http_port, log_config=None)


if __name__ == "__main__":
    main()
