"""Logging configuration."""

import logging
import sys
from typing import Optional

from virtual_trading.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - [%(threadName)s] %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging.

    Trades and rejections log at INFO, price and FX feed trouble at
    WARNING. The thread name is included because price fetches run on a
    worker pool.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("virtual_trading").setLevel(log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
