# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

logger = logging.getLogger("storefront")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Child logger of ``storefront``; module names are used as-is."""
    if not name:
        return logger
    if name == "storefront" or name.startswith("storefront."):
        return logging.getLogger(name)
    return logging.getLogger(f"storefront.{name}")
