import sys

from loguru import logger
from nostr_sdk import init_logger, LogLevel

_initialized = False

NOSTR_LEVELS = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARN,
    'ERROR': LogLevel.ERROR,
}


def init_logging(level: str = 'INFO') -> None:
    """Configure loguru and nostr logging once per process; later calls do nothing"""
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    init_logger(NOSTR_LEVELS.get(level, LogLevel.INFO))
