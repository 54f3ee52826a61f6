# core/logging_config.py
import logging

from core.config import settings

LOGGER_NAME = "roomrent"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(level) -> int:
    """'debug' / 'INFO' / 20 → logging level; anything unknown → INFO."""
    if isinstance(level, int):
        return level
    name = str(level or "").strip().upper()
    return LEVELS.get(name, logging.INFO)


def setup_logger(level=None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level if level is not None else settings.LOG_LEVEL))

    # uvicorn --reload re-imports this module
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(component: str) -> logging.Logger:
    """Child logger, e.g. get_logger("billing") → "roomrent.billing"."""
    return logging.getLogger(LOGGER_NAME).getChild(component)


logger = setup_logger()
