import logging
import sys

from app.core.config import settings


def setup_logging(level: int | str | None = None) -> None:
    """Configure the root logger once at startup.

    Falls back to ``settings.LOG_LEVEL`` when no level is given.
    """
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )
    stream_handler = logging.StreamHandler(stream=sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    root_logger.addHandler(stream_handler)

    logging.getLogger("celery").setLevel(logging.WARNING)
